from fastapi import status


class ApiError(Exception):
    """Base for errors rendered as ``{"success": false, "error": ..., "message": ...}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: str, message: str | None = None):
        super().__init__(error)
        self.error = error
        self.message = message

    def to_content(self) -> dict:
        content = {"success": False, "error": self.error}
        if self.message:
            content["message"] = self.message
        return content


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND

    @classmethod
    def for_resource(cls, resource: str) -> "NotFound":
        return cls(f"{resource} not found")


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
