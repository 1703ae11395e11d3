"""Application exception hierarchy."""

# Default user-facing messages
_DEFAULT_USER_MSG = "Something went wrong"
_MALFORMED_URL_MSG = "Could not build an image URL"
_MEDIA_READ_MSG = "Could not read the media file"


class AppError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str = "Internal error",
        user_message: str = _DEFAULT_USER_MSG,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.user_message = user_message


class MalformedUrlError(AppError):
    """Raised when a URL cannot be split into host and path."""

    def __init__(
        self,
        message: str = "Malformed URL",
        user_message: str = _MALFORMED_URL_MSG,
    ) -> None:
        super().__init__(message=message, user_message=user_message)


class MediaReadError(AppError):
    """Raised when a media file cannot be opened for type detection."""

    def __init__(
        self,
        message: str = "Media file unreadable",
        user_message: str = _MEDIA_READ_MSG,
    ) -> None:
        super().__init__(message=message, user_message=user_message)
