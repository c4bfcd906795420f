"""Error kinds reported by the game service.

Each error carries a stable `code` and an HTTP `status` so the blueprints
can render it without knowing which operation raised it.
"""


class GameError(Exception):
    code = 'GameError'
    status = 400
    retryable = False

    def __init__(self, message: str = None):
        super().__init__(message or self.code)
        self.message = message or self.code

    def to_dict(self):
        return {'error': self.message, 'code': self.code, 'retryable': self.retryable}


class InvalidDifficulty(GameError):
    code = 'InvalidDifficulty'


class PlayerNotFound(GameError):
    code = 'PlayerNotFound'
    status = 404


class InsufficientFunds(GameError):
    code = 'InsufficientFunds'


class SessionNotActive(GameError):
    code = 'SessionNotActive'
    status = 409


class SessionExpired(GameError):
    code = 'SessionExpired'


class CardNotFound(GameError):
    code = 'CardNotFound'
    status = 404


class CardUnavailable(GameError):
    code = 'CardUnavailable'


class ValidationFailed(GameError):
    code = 'ValidationFailed'

    def __init__(self, message: str = None, details=None):
        super().__init__(message)
        self.details = details or []

    def to_dict(self):
        payload = super().to_dict()
        payload['details'] = self.details
        return payload


class StoreUnavailable(GameError):
    code = 'StoreUnavailable'
    status = 503
    retryable = True


class StoreRejected(GameError):
    code = 'StoreRejected'
    status = 409
