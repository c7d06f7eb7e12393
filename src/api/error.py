from fastapi import status
from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    """
    Server-side failure. public_message is what the client sees; the
    underlying error message is only logged.
    """

    def __init__(self, base_error: Error, public_message: str = "Internal server error, please try again later"):
        self.base_error = base_error
        self.public_message = public_message
        super().__init__(base_error.message)
