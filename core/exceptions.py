"""Application exception hierarchy."""

# Default user-facing messages
_DEFAULT_USER_MSG = "Something went wrong"
_CONNECTION_VALIDATION_MSG = "Could not connect to the platform. Check the stored credentials"
_PUBLISH_MSG = "Publishing failed"
_TRUNCATED_MSG = "The platform stored an incomplete copy of the post"
_IMAGE_UPLOAD_MSG = "Featured image could not be uploaded"
_UNKNOWN_PROVIDER_MSG = "This publishing platform is not supported"


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


class ConnectionValidationError(AppError):
    """Raised by callers when an adapter's test_connection() returned False."""

    def __init__(
        self,
        message: str = "Connection validation failed",
        user_message: str = _CONNECTION_VALIDATION_MSG,
    ) -> None:
        super().__init__(message=message, user_message=user_message)


class PublishError(AppError):
    """Raised when publishing to a platform fails.

    status_code and body are set when the failure came from an HTTP response.
    """

    def __init__(
        self,
        message: str = "Publishing failed",
        user_message: str = _PUBLISH_MSG,
        *,
        provider: str = "",
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message=message, user_message=user_message)
        self.provider = provider
        self.status_code = status_code
        self.body = body


class ContentTruncatedError(PublishError):
    """Platform accepted the post but stored less content than was sent."""

    def __init__(
        self,
        message: str = "Content was truncated",
        user_message: str = _TRUNCATED_MSG,
        *,
        provider: str = "",
        completeness: int = 0,
    ) -> None:
        super().__init__(message=message, user_message=user_message, provider=provider)
        self.completeness = completeness


class ImageUploadError(AppError):
    """Featured image download/upload failed. Never escapes the uploader."""

    def __init__(
        self,
        message: str = "Image upload failed",
        user_message: str = _IMAGE_UPLOAD_MSG,
    ) -> None:
        super().__init__(message=message, user_message=user_message)


class UnknownProviderError(AppError, ValueError):
    """Raised by get_adapter() for a provider string it does not know."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            message=f"Unknown provider: {provider}",
            user_message=_UNKNOWN_PROVIDER_MSG,
        )
        self.provider = provider
