from fastapi import status
from src.domain.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


STATUS_BY_CODE = {
    # Conflict
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "ROLE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "PERMISSION_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "ROLE_ALREADY_ASSIGNED": status.HTTP_409_CONFLICT,
    "PERMISSION_ALREADY_GRANTED": status.HTTP_409_CONFLICT,
    # Authentication
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    # Authorization
    "INSUFFICIENT_PERMISSIONS": status.HTTP_403_FORBIDDEN,
    # Not found
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ROLE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PERMISSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ROLE_NOT_ASSIGNED": status.HTTP_404_NOT_FOUND,
    "PERMISSION_NOT_GRANTED": status.HTTP_404_NOT_FOUND,
    # Rejected
    "DEFAULT_ROLE_UNDELETABLE": status.HTTP_400_BAD_REQUEST,
    "ROLE_IN_USE": status.HTTP_400_BAD_REQUEST,
    "PERMISSION_IN_USE": status.HTTP_400_BAD_REQUEST,
    "CANNOT_DEACTIVATE_SELF": status.HTTP_400_BAD_REQUEST,
}


def raise_for_error(error: Error):
    """Raise the HTTP exception matching a use case error code"""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
