"""
floor/exceptions.py

Domain errors raised by the repository and state machine. Each carries a
short, user-facing message; nothing else is shown to the guest-facing UI.
"""


class FloorError(Exception):
    """Base class for floor management errors."""

    default_message = "Something went wrong."
    status_code = 500

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class StoreUnavailable(FloorError):
    """The data store could not be reached or the query failed."""

    default_message = "The data store is unavailable."
    status_code = 503


class NotFound(FloorError):
    default_message = "The requested record does not exist."
    status_code = 404


class ValidationError(FloorError):
    default_message = "Invalid input."
    status_code = 400


class InvalidTransition(FloorError):
    """An action was requested against a table in the wrong state."""

    status_code = 409

    def __init__(self, action, current, message=None):
        self.action = action
        self.current = current
        super().__init__(
            message or f"Cannot {action.replace('_', ' ')} a table that is {current}."
        )
