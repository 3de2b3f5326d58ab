from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific generative text clients."""

    @abstractmethod
    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_output_tokens: int,
        system_prompt: str,
        user_prompt: str,
        json_output: bool,
    ) -> str:
        """Return the provider response as plain text.

        Raises:
            AnalysisUnavailableError: on network, auth or quota failures.
            AnalysisError: when the provider returns no usable content.
        """
