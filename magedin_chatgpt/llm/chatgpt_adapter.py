"""ChatGPT provider adapter.

Architectural role:
    Translates a provider-agnostic `AiRequest` into one OpenAI chat-completion
    call and maps the reply into an `AiResponse`.

Model invocation flow:
    `query(request)` -> configuration check -> `build_payload(request)` ->
    `_send_request(api_key, payload)` -> content/usage extraction.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once with
    `timeout=REQUEST_TIMEOUT`.

Failure handling model:
    Every exception raised between the configuration check and response
    extraction is logged and converted into a failed `AiResponse`. Callers
    never see an exception from `query`.

Concurrency:
    No state is shared between calls beyond the injected `requests.Session`,
    which is safe for concurrent use in the usual request/response pattern.
"""

import logging

import requests

from magedin_chatgpt.config.settings import ChatGptConfig
from magedin_chatgpt.errors import ApiRequestError, MalformedResponseError, NotConfiguredError
from magedin_chatgpt.llm.base import AiProviderAdapter
from magedin_chatgpt.llm.types import AiRequest, AiResponse

PROVIDER_NAME = "chatgpt"
API_ENDPOINT = "https://api.openai.com/v1/chat/completions"
REQUEST_TIMEOUT = 120

SUPPORTED_FEATURES = (
    "text_generation",
    "conversation",
    "context_aware",
    "temperature_control",
    "max_tokens_control",
)

logger = logging.getLogger(__name__)


class ChatGptAdapter(AiProviderAdapter):
    """Adapter for OpenAI's chat-completions endpoint."""

    def __init__(self, config: ChatGptConfig, session=None, timeout=REQUEST_TIMEOUT):
        self.config = config
        self.session = session or requests.Session()
        self.timeout = timeout

    def query(self, request: AiRequest) -> AiResponse:
        """Run one completion request and return a normalized response.

        Failure scenarios:
            - Provider disabled or API key missing -> "not configured" failure,
              no HTTP call.
            - Transport errors and non-200 statuses -> failure carrying the
              exception text.
            - Non-object JSON body -> malformed-response failure.
        """
        try:
            if not self.config.is_enabled():
                raise NotConfiguredError("ChatGPT provider is disabled and not configured")

            api_key = self.config.get_api_key()
            if not api_key:
                raise NotConfiguredError("ChatGPT API key is not configured")

            payload = self.build_payload(request)
            api_response = self._send_request(api_key, payload)

            return AiResponse.ok(
                PROVIDER_NAME,
                content=self._extract_content(api_response),
                tokens_used=self._extract_tokens(api_response),
                metadata=api_response,
            )

        except Exception as e:
            logger.exception("ChatGPT API request failed: %s", e)
            return AiResponse.failure(PROVIDER_NAME, str(e))

    def get_provider_name(self) -> str:
        return PROVIDER_NAME

    def is_available(self) -> bool:
        return self.config.is_configured()

    def get_supported_features(self) -> list[str]:
        return list(SUPPORTED_FEATURES)

    def build_payload(self, request: AiRequest) -> dict:
        """Build the chat-completion request body.

        Parameter handling:
            - `max_tokens` / `temperature` overrides win whenever they are not
              `None`, so an explicit `temperature=0` is sent as-is.
            - A non-blank `context["system_message"]` is sent as the first
              message, ahead of the user message.
        """
        messages = []

        system_message = request.get_system_message()
        if system_message:
            messages.append({"role": "system", "content": system_message})

        messages.append({"role": "user", "content": request.message})

        max_tokens = request.max_tokens
        if max_tokens is None:
            max_tokens = self.config.get_default_max_tokens()

        temperature = request.temperature
        if temperature is None:
            temperature = self.config.get_default_temperature()

        return {
            "model": self.config.get_model(),
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    def _send_request(self, api_key: str, payload: dict) -> dict:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        response = self.session.post(
            API_ENDPOINT,
            headers=headers,
            json=payload,
            timeout=self.timeout,
        )

        if response.status_code != 200:
            raise ApiRequestError(response.status_code, response.text)

        data = response.json()
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"ChatGPT API returned a malformed response: expected a JSON object, "
                f"got {type(data).__name__}"
            )
        return data

    def _extract_content(self, api_response: dict) -> str:
        try:
            content = api_response["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.debug("ChatGPT response has no choices[0].message.content")
            return ""
        return content if content is not None else ""

    def _extract_tokens(self, api_response: dict) -> int | None:
        usage = api_response.get("usage")
        total_tokens = usage.get("total_tokens") if isinstance(usage, dict) else None
        if not isinstance(total_tokens, int) or isinstance(total_tokens, bool):
            logger.debug("ChatGPT response has no usable usage.total_tokens: %r", total_tokens)
            return None
        return total_tokens
