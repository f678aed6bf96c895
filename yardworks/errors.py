# yardworks/errors.py
"""Error types raised by the lifecycle code and translated by the app."""

from typing import Optional


class YardworksError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'error': self.message}


class NotFoundError(YardworksError):
    status_code = 404
    message = 'Not found'


class ConflictError(YardworksError):
    status_code = 409
    message = 'Conflict'


class IllegalTransitionError(ConflictError):
    """A dedicated transition was requested from a state that does not allow it."""

    def __init__(self, quote_number: str, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f'Quote {quote_number} is {current} and cannot be {target}'
        )

    def to_dict(self) -> dict:
        return {'error': self.message, 'status': self.current}


def validation_details(exc) -> list:
    """Flatten a pydantic ``ValidationError`` into field/message pairs."""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get('loc', ())]
        details.append({
            'field': '.'.join(loc) if loc else None,
            'message': err.get('msg', 'Invalid value'),
        })
    return details


class InvalidDataError(YardworksError):
    """Input that passed schema checks but fails against stored state."""
    status_code = 400
    message = 'Invalid data'

    def __init__(self, field: str, problem: str):
        self.details = [{'field': field, 'message': problem}]
        super().__init__()

    def to_dict(self) -> dict:
        return {'error': self.message, 'details': self.details}


def failure_message(message: str):
    """Attach the message reported to clients when the view fails unexpectedly."""
    def decorator(view):
        view.failure_message = message
        return view
    return decorator
