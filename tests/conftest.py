"""
Shared fixtures: in-memory settings and a real Fernet encryptor.
"""

import pytest
from cryptography.fernet import Fernet

from magedin_chatgpt.config.encryptor import Encryptor
from magedin_chatgpt.config.scope_config import ScopeConfig
from magedin_chatgpt.config.settings import (
    CONFIG_API_KEY,
    CONFIG_ENABLED,
    CONFIG_MODEL,
    ChatGptConfig,
)
from tests.helpers import API_KEY


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's `.env` and shell settings out of the tests.

    Variables are set to empty strings rather than deleted: `load_dotenv()`
    never overrides a variable that already exists, and every reader treats
    an empty value as unset.
    """
    monkeypatch.chdir(tmp_path)
    for name in (
        "MAGEDIN_AI_CHATGPT_ENABLED",
        "MAGEDIN_AI_CHATGPT_API_KEY",
        "MAGEDIN_AI_CHATGPT_MODEL",
        "MAGEDIN_CRYPT_KEY",
        "MAGEDIN_CHATGPT_CONFIG_FILE",
    ):
        monkeypatch.setenv(name, "")


@pytest.fixture
def encryptor():
    return Encryptor(Fernet.generate_key().decode("utf-8"))


@pytest.fixture
def make_config(encryptor):
    def _make(enabled="1", api_key=API_KEY, model=None):
        default = {}
        if enabled is not None:
            default[CONFIG_ENABLED] = enabled
        if api_key is not None:
            default[CONFIG_API_KEY] = encryptor.encrypt(api_key)
        if model is not None:
            default[CONFIG_MODEL] = model
        return ChatGptConfig(ScopeConfig({"default": default}), encryptor)

    return _make
