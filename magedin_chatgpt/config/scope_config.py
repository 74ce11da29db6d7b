"""Hierarchical scoped settings store.

Architectural role:
    Stands in for the host platform's scoped configuration system. Values are
    organized in three layers (default, website, store) and looked up by a
    slash-separated path such as `magedin_ai/chatgpt/model`.

Resolution order:
    - `default` scope: default layer only.
    - `website` scope: website layer, then default.
    - `store` scope: store layer, then the store's website layer (when the
      store is mapped to one), then default.

Sources:
    - In-memory mapping passed to the constructor (tests, embedding callers).
    - Environment variables, loaded through `python-dotenv`.
    - JSON file holding the layered mapping.

Determinism:
    Lookups are pure reads over the mapping captured at construction time.
"""

import json
import os

from dotenv import load_dotenv

from magedin_chatgpt.errors import ConfigurationError

SCOPE_DEFAULT = "default"
SCOPE_WEBSITE = "website"
SCOPE_STORE = "store"

_SCOPE_ALIASES = {
    "default": SCOPE_DEFAULT,
    "website": SCOPE_WEBSITE,
    "websites": SCOPE_WEBSITE,
    "store": SCOPE_STORE,
    "stores": SCOPE_STORE,
}

_FALSE_STRINGS = {"", "0", "false", "no", "off"}


def path_to_env_name(path):
    """Map a config path to its environment variable name.

    `magedin_ai/chatgpt/api_key` -> `MAGEDIN_AI_CHATGPT_API_KEY`.
    """
    return path.replace("/", "_").upper()


def _check_layers(data, path):
    """Raise `ConfigurationError` unless every layer in `data` is well formed."""
    default = data.get("default")
    if default is not None and not isinstance(default, dict):
        raise ConfigurationError(f"Scope config file {path}: 'default' must be an object")

    for key in ("websites", "stores"):
        scopes = data.get(key)
        if scopes is None:
            continue
        if not isinstance(scopes, dict):
            raise ConfigurationError(f"Scope config file {path}: '{key}' must be an object")
        for code, layer in scopes.items():
            if layer is not None and not isinstance(layer, dict):
                raise ConfigurationError(
                    f"Scope config file {path}: '{key}.{code}' must be an object"
                )

    store_websites = data.get("store_websites")
    if store_websites is None:
        return
    if not isinstance(store_websites, dict) or not all(
        isinstance(website, (str, int)) and not isinstance(website, bool)
        for website in store_websites.values()
    ):
        raise ConfigurationError(
            f"Scope config file {path}: 'store_websites' must map store codes to website codes"
        )


class ScopeConfig:
    """Layered default/website/store settings lookup."""

    def __init__(self, values=None, store_websites=None):
        values = values or {}
        self._default = dict(values.get("default") or {})
        self._websites = {
            str(code): dict(layer or {}) for code, layer in (values.get("websites") or {}).items()
        }
        self._stores = {
            str(code): dict(layer or {}) for code, layer in (values.get("stores") or {}).items()
        }
        self._store_websites = {
            str(store): str(website)
            for store, website in (store_websites or values.get("store_websites") or {}).items()
        }

    @classmethod
    def from_env(cls, paths):
        """Build a default-scope store from environment variables.

        Args:
            paths: Config paths to read. Each is mapped with `path_to_env_name`.

        Returns:
            `ScopeConfig` whose default layer holds every path that has a
            non-empty environment value.
        """
        load_dotenv()
        default = {}
        for path in paths:
            value = os.getenv(path_to_env_name(path))
            if value is not None and value != "":
                default[path] = value
        return cls({"default": default})

    @classmethod
    def from_json_file(cls, path):
        """Load the layered mapping from a JSON file.

        Edge cases:
            - Missing file -> empty store.
            - Invalid JSON, non-object root or a layer that is not a mapping
              -> `ConfigurationError`. `null` layers count as absent.
        """
        if not os.path.exists(path):
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as err:
            raise ConfigurationError(f"Cannot read scope config file {path}: {err}") from err

        if not isinstance(data, dict):
            raise ConfigurationError(f"Scope config file {path} must contain a JSON object")

        _check_layers(data, path)
        return cls(data)

    def _layers(self, scope_type, scope_code):
        scope = _SCOPE_ALIASES.get(scope_type or SCOPE_DEFAULT)
        if scope is None:
            raise ValueError(f"Unknown scope type: {scope_type}")

        layers = []
        if scope_code is not None:
            code = str(scope_code)
            if scope == SCOPE_STORE:
                layers.append(self._stores.get(code, {}))
                website = self._store_websites.get(code)
                if website is not None:
                    layers.append(self._websites.get(website, {}))
            elif scope == SCOPE_WEBSITE:
                layers.append(self._websites.get(code, {}))
        layers.append(self._default)
        return layers

    def get_value(self, path, scope_type=SCOPE_STORE, scope_code=None):
        """Return the most specific value for `path`, or `None` when unset."""
        for layer in self._layers(scope_type, scope_code):
            if path in layer:
                return layer[path]
        return None

    def is_set_flag(self, path, scope_type=SCOPE_STORE, scope_code=None):
        """Return the value at `path` coerced to a boolean flag."""
        value = self.get_value(path, scope_type, scope_code)
        if isinstance(value, str):
            return value.strip().lower() not in _FALSE_STRINGS
        return bool(value)
