class GenerationError(Exception):
    """Raised when generating keywords or alt text fails."""


class GenerationNetworkError(GenerationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class ProviderStatusError(GenerationError):
    """Raised when the AI provider answers with an HTTP error status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        """Rate limiting and server-side failures are worth another attempt."""
        return self.status_code == 429 or self.status_code >= 500


class ImageLoadError(GenerationError):
    """Raised when an image cannot be fetched or is not usable for vision input."""
