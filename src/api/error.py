"""
HTTP-facing exceptions. Routes translate use case errors into these; the
handlers in app.py render them as {"error": {"code", "message"}}.
"""

from fastapi import status
from src.app.services.token_lifecycle import UNAUTHORIZED
from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    @classmethod
    def unauthorized(cls) -> "ClientError":
        """The one 401 body every failed token check gets"""
        return cls(UNAUTHORIZED, status_code=status.HTTP_401_UNAUTHORIZED)


class ServerError(Exception):
    """Unexpected error code; the message is not shown to the client"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)
