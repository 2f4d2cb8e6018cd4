from typing import Optional


class CommandError(Exception):
    """A user facing error that aborts the current command.

    Can be raised either with a message only, or with an error code followed
    by the message:

        CommandError("Something went wrong")
        CommandError("INVALID_PUBLIC_URL", "--public-url must be a valid HTTPS URL.")
    """

    def __init__(self, code: str, message: Optional[str] = None):
        if message is None:
            code, message = "COMMAND_ERROR", code
        super().__init__(message)
        self.code = code
        self.message = message


class BuildServiceError(CommandError):
    """Raised when the remote build service answers with an error"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("BUILD_SERVICE_ERROR", message)
        self.status_code = status_code
