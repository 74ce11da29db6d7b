"""Error taxonomy for the ChatGPT connector.

Failure classes:
    - not configured: provider disabled or API key missing/undecryptable.
    - transport/HTTP failure: non-200 status from the completions endpoint.
    - malformed response: body that does not decode to a JSON object.

Error handling strategy:
    Adapter-level errors are raised internally and caught at the
    `ChatGptAdapter.query` boundary, where they become failed `AiResponse`
    records. `ConfigurationError` is the exception that does surface to
    callers, at wiring time, for broken scope files or encryption keys.
"""


class ChatGptError(Exception):
    """Base class for connector errors."""


class ConfigurationError(ChatGptError):
    """Raised when settings or encryption material cannot be loaded."""


class NotConfiguredError(ChatGptError):
    """Raised when the provider is disabled or has no usable API key."""


class ApiRequestError(ChatGptError):
    """Raised for non-200 responses from the completions endpoint."""

    def __init__(self, status_code, body):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"ChatGPT API request failed with status code: {status_code}. Response: {body}"
        )


class MalformedResponseError(ChatGptError):
    """Raised when a 200 response body is not a JSON object."""
