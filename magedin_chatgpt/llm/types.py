"""Request/response records exchanged with provider adapters.

Architectural role:
    `AiRequest` is the provider-agnostic input to `AiProviderAdapter.query`.
    `AiResponse` is the normalized result: every call returns one, and failure
    is expressed through `success=False` plus `error_message` rather than an
    exception.

Determinism:
    Purely structural records without side effects.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AiRequest:
    """Generic text-generation request.

    Attributes:
        message: User message text.
        context: Optional conversation context. `system_message` is the only
            key consumed by the ChatGPT adapter.
        max_tokens: Optional override of the configured token limit.
        temperature: Optional override of the configured sampling temperature.
    """

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    max_tokens: int | None = None
    temperature: float | None = None

    def get_system_message(self) -> str | None:
        system_message = (self.context or {}).get("system_message")
        if isinstance(system_message, str) and system_message.strip():
            return system_message
        return None


@dataclass
class AiResponse:
    """Normalized provider response.

    Attributes:
        provider: Provider name that produced the response.
        success: Whether the call completed and returned a usable body.
        content: Generated text; empty on failure.
        tokens_used: Total tokens reported by the provider, if any.
        metadata: Raw decoded provider response body.
        error_message: Human-readable failure reason; only set on failure.
    """

    provider: str
    success: bool = False
    content: str = ""
    tokens_used: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    error_message: str | None = None

    @classmethod
    def ok(cls, provider, content, tokens_used=None, metadata=None):
        return cls(
            provider=provider,
            success=True,
            content=content,
            tokens_used=tokens_used,
            metadata=metadata or {},
        )

    @classmethod
    def failure(cls, provider, error_message):
        return cls(provider=provider, success=False, content="", error_message=error_message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "success": self.success,
            "content": self.content,
            "tokens_used": self.tokens_used,
            "metadata": self.metadata,
            "error_message": self.error_message,
        }
