"""Configuration package.

Module split:
    - `scope_config`: hierarchical default/website/store settings store.
    - `encryptor`: Fernet-based encryption of stored secrets.
    - `settings`: ChatGPT configuration provider built on both.
"""

from magedin_chatgpt.config.encryptor import Encryptor
from magedin_chatgpt.config.scope_config import ScopeConfig
from magedin_chatgpt.config.settings import ChatGptConfig

__all__ = ["ChatGptConfig", "Encryptor", "ScopeConfig"]
