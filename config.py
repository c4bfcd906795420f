import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///players.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Balance credited to newly created players
    STARTING_COINS = int(os.environ.get('STARTING_COINS', '1000'))
    # Difficulty used when the start request omits ?difficulty=
    DEFAULT_DIFFICULTY = os.environ.get('DEFAULT_DIFFICULTY', 'medium')
    # Background sweep of expired sessions (seconds). 0 disables; expiry is still checked on flip/state.
    SESSION_SWEEP_SEC = int(os.environ.get('SESSION_SWEEP_SEC', '0'))
    # Number of per-player lock stripes guarding session + player mutation
    LOCK_STRIPES = int(os.environ.get('LOCK_STRIPES', '64'))
