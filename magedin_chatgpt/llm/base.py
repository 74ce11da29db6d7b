"""Abstract AI provider adapter."""

from __future__ import annotations

from abc import ABC, abstractmethod

from magedin_chatgpt.llm.types import AiRequest, AiResponse


class AiProviderAdapter(ABC):
    """Base class for vendor-specific provider adapters."""

    @abstractmethod
    def query(self, request: AiRequest) -> AiResponse:
        """Send one request to the provider and return a normalized response.

        Implementations never raise; failures are returned as responses with
        `success=False`.
        """
        ...

    @abstractmethod
    def get_provider_name(self) -> str: ...

    @abstractmethod
    def is_available(self) -> bool: ...

    @abstractmethod
    def get_supported_features(self) -> list[str]: ...
