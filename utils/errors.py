"""
utils/errors.py
---------------
Exception hierarchy raised by the data-access layer.

Every error carries a ``status_code`` so the HTTP layer sitting on top can
translate it into a response without inspecting the message.
"""


class ServiceError(Exception):
    """Base class for every error the repositories raise on purpose."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class StoreError(ServiceError):
    """A statement failed against the database."""

    status_code = 500


class StoreUnavailable(StoreError):
    """No connection could be acquired."""

    status_code = 503


class NotFound(ServiceError):
    """A referenced row does not exist."""

    status_code = 404


class InvalidCredentials(ServiceError):
    """Unknown email or password mismatch."""

    status_code = 404

    def __init__(self, message: str = "unknown user"):
        super().__init__(message)


class FranchiseDeletionFailed(ServiceError):
    """Franchise deletion was rolled back. The cause is logged, not exposed."""

    status_code = 500

    def __init__(self, message: str = "unable to delete franchise"):
        super().__init__(message)


class InvalidToken(ServiceError):
    """A session token without a signature segment."""

    status_code = 401

    def __init__(self, message: str = "token has no signature segment"):
        super().__init__(message)
