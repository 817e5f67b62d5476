from fastapi import status


class HostelError(Exception):
    """Base class for business-rule failures surfaced to API callers."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidInputError(HostelError):
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateKeyError(HostelError):
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(HostelError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(HostelError):
    status_code = status.HTTP_409_CONFLICT
