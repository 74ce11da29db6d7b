"""ChatGPT configuration provider.

Architectural role:
    Centralizes the ChatGPT settings consumed by
    `magedin_chatgpt.llm.chatgpt_adapter.ChatGptAdapter`: enabled flag,
    decrypted API key, model identifier and the fixed generation defaults.

Settings paths:
    - `magedin_ai/chatgpt/enabled`
    - `magedin_ai/chatgpt/api_key` (stored encrypted)
    - `magedin_ai/chatgpt/model`

Wiring:
    `ChatGptConfig.from_env()` reads the environment (via `python-dotenv`), or
    the JSON scope file named by `MAGEDIN_CHATGPT_CONFIG_FILE` when set.

Failure behavior:
    Missing or undecryptable values are reported as "not configured" through
    `None`/`False` results; nothing here raises during lookups.
"""

import os

from dotenv import load_dotenv

from magedin_chatgpt.config.encryptor import Encryptor
from magedin_chatgpt.config.scope_config import SCOPE_STORE, ScopeConfig

CONFIG_ENABLED = "magedin_ai/chatgpt/enabled"
CONFIG_API_KEY = "magedin_ai/chatgpt/api_key"
CONFIG_MODEL = "magedin_ai/chatgpt/model"

CONFIG_PATHS = (CONFIG_ENABLED, CONFIG_API_KEY, CONFIG_MODEL)

CONFIG_FILE_ENV = "MAGEDIN_CHATGPT_CONFIG_FILE"

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7


class ChatGptConfig:
    """Read-only view of the ChatGPT settings for a given scope."""

    def __init__(self, scope_config: ScopeConfig, encryptor: Encryptor):
        self.scope_config = scope_config
        self.encryptor = encryptor

    @classmethod
    def from_env(cls):
        """Build a provider from the process environment.

        Resolution:
            1. `MAGEDIN_CHATGPT_CONFIG_FILE` -> layered JSON scope file.
            2. Otherwise `MAGEDIN_AI_CHATGPT_*` environment variables.
        """
        load_dotenv()
        config_file = os.getenv(CONFIG_FILE_ENV)
        if config_file:
            scope_config = ScopeConfig.from_json_file(config_file)
        else:
            scope_config = ScopeConfig.from_env(CONFIG_PATHS)
        return cls(scope_config, Encryptor.from_env())

    def is_enabled(self, scope_type=SCOPE_STORE, scope_code=None) -> bool:
        return self.scope_config.is_set_flag(CONFIG_ENABLED, scope_type, scope_code)

    def get_api_key(self, scope_type=SCOPE_STORE, scope_code=None) -> str | None:
        """Return the decrypted API key, or `None` when empty or undecryptable."""
        encrypted_value = self.scope_config.get_value(CONFIG_API_KEY, scope_type, scope_code)
        if not encrypted_value:
            return None

        api_key = self.encryptor.decrypt(str(encrypted_value)).strip()
        return api_key or None

    def get_model(self, scope_type=SCOPE_STORE, scope_code=None) -> str:
        model = self.scope_config.get_value(CONFIG_MODEL, scope_type, scope_code)
        return str(model) if model else DEFAULT_MODEL

    def get_default_max_tokens(self) -> int:
        return DEFAULT_MAX_TOKENS

    def get_default_temperature(self) -> float:
        return DEFAULT_TEMPERATURE

    def is_configured(self, scope_type=SCOPE_STORE, scope_code=None) -> bool:
        """True when the provider is enabled and has a usable API key."""
        return self.is_enabled(scope_type, scope_code) and bool(
            self.get_api_key(scope_type, scope_code)
        )

    def get_configuration(self, scope_type=SCOPE_STORE, scope_code=None) -> dict:
        """Return every setting for the scope as a flat dict."""
        return {
            "enabled": self.is_enabled(scope_type, scope_code),
            "api_key": self.get_api_key(scope_type, scope_code),
            "model": self.get_model(scope_type, scope_code),
            "default_max_tokens": self.get_default_max_tokens(),
            "default_temperature": self.get_default_temperature(),
            "is_configured": self.is_configured(scope_type, scope_code),
        }
