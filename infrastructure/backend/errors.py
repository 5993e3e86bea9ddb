from typing import Optional


class BackendError(Exception):
    """Base error for every failed call to the hosted backend."""

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code


class AuthApiError(BackendError):
    pass


class DataApiError(BackendError):
    pass


class BackendConfigError(BackendError):
    pass
