from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific chat and vision completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        user_prompt: str,
        system_prompt: str = "",
    ) -> str:
        """Return the first choice's message content as plain text.

        Raises:
            GenerationNetworkError: on transport failures and timeouts.
            ProviderStatusError: on HTTP error responses.
            GenerationError: when the provider returns no content.
        """

    @abstractmethod
    def create_vision_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        prompt: str,
        image_data_url: str,
    ) -> str:
        """Describe an image given as a data URL; same error contract as chat."""
