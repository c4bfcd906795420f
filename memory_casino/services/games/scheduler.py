import time

from memory_casino import socketio


_sweeper_started: set = set()


def start_expiry_sweeper(app) -> bool:
    """Start the background task that finishes expired sessions.

    - No-ops when SESSION_SWEEP_SEC is 0 or in TESTING mode
    - Runs at most once per app
    - Uses GameService.sweep_expired, so it shares the per-player locks
    """
    interval = int(app.config.get('SESSION_SWEEP_SEC', 0))
    if interval <= 0:
        return False
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return False
    if id(app) in _sweeper_started:
        return False
    _sweeper_started.add(id(app))
    app.logger.info(f"[sweeper-start] interval={interval}s")
    socketio.start_background_task(_worker, app, interval)
    return True


def run_sweep(app) -> list:
    """One sweep pass; notifies each affected player's room."""
    with app.app_context():
        service = app.extensions['memory_casino']
        expired = service.sweep_expired()
    for player_id in expired:
        socketio.emit('session_expired', {'player_id': player_id}, to=f"player:{player_id}", namespace='/ws')
        socketio.emit('state_update', {'player_id': player_id}, to=f"player:{player_id}", namespace='/ws')
    return expired


def _worker(app, interval: int):
    while True:
        time.sleep(interval)
        try:
            run_sweep(app)
        except Exception as exc:
            # Keep the sweeper alive; lazy expiry on flip/state still applies
            app.logger.exception(f"[sweeper-error] {exc}")
