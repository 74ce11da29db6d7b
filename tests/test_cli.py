import json

import pytest
from cryptography.fernet import Fernet

from magedin_chatgpt.api import cli
from magedin_chatgpt.config.encryptor import Encryptor
from magedin_chatgpt.llm.types import AiResponse
from tests.helpers import API_KEY


class StubAdapter:
    def __init__(self, responses, available=True):
        self.responses = list(responses)
        self.requests = []
        self.available = available

    def __call__(self, config):
        return self

    def is_available(self):
        return self.available

    def query(self, request):
        self.requests.append(request)
        return self.responses.pop(0)


@pytest.fixture
def configured_env(monkeypatch):
    key = Fernet.generate_key().decode("utf-8")
    monkeypatch.setenv("MAGEDIN_CRYPT_KEY", key)
    monkeypatch.setenv("MAGEDIN_AI_CHATGPT_ENABLED", "1")
    monkeypatch.setenv("MAGEDIN_AI_CHATGPT_API_KEY", Encryptor(key).encrypt(API_KEY))
    return key


def test_mask_secret():
    assert cli.mask_secret(None) is None
    assert cli.mask_secret("abc") == "***"
    assert cli.mask_secret("sk-123456") == "*****3456"


def test_query_prints_content(monkeypatch, capsys, configured_env):
    stub = StubAdapter([AiResponse.ok("chatgpt", "hello", 42)])
    monkeypatch.setattr(cli, "ChatGptAdapter", stub)

    code = cli.main(["query", "Hi", "--system", "Be brief.", "--max-tokens", "20", "--temperature", "0"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "hello"
    request = stub.requests[0]
    assert request.message == "Hi"
    assert request.get_system_message() == "Be brief."
    assert request.max_tokens == 20
    assert request.temperature == 0.0


def test_query_failure_exits_nonzero(monkeypatch, capsys, configured_env):
    stub = StubAdapter([AiResponse.failure("chatgpt", "ChatGPT API key is not configured")])
    monkeypatch.setattr(cli, "ChatGptAdapter", stub)

    code = cli.main(["query", "Hi"])

    assert code == 1
    assert "not configured" in capsys.readouterr().err


def test_query_json_output(monkeypatch, capsys, configured_env):
    stub = StubAdapter([AiResponse.ok("chatgpt", "hello", 42)])
    monkeypatch.setattr(cli, "ChatGptAdapter", stub)

    cli.main(["query", "Hi", "--json"])

    record = json.loads(capsys.readouterr().out)
    assert record["success"] is True
    assert record["tokens_used"] == 42


def test_chat_loop(monkeypatch, capsys, configured_env):
    stub = StubAdapter([AiResponse.ok("chatgpt", "first answer", 7)])
    monkeypatch.setattr(cli, "ChatGptAdapter", stub)
    inputs = iter(["", "What is up?", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

    code = cli.main(["chat"])

    out = capsys.readouterr().out
    assert code == 0
    assert "first answer" in out
    assert "[tokens used: 7]" in out
    assert len(stub.requests) == 1


def test_chat_ends_on_eof(monkeypatch, capsys, configured_env):
    monkeypatch.setattr(cli, "ChatGptAdapter", StubAdapter([]))

    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)

    assert cli.main(["chat"]) == 0
    assert "Session ended." in capsys.readouterr().out


def test_chat_refuses_when_not_configured(monkeypatch, capsys):
    monkeypatch.setattr(cli, "ChatGptAdapter", StubAdapter([], available=False))

    assert cli.main(["chat"]) == 1
    assert "not configured" in capsys.readouterr().out


def test_models_marks_active(monkeypatch, capsys):
    monkeypatch.setenv("MAGEDIN_AI_CHATGPT_MODEL", "gpt-4o")

    cli.main(["models"])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 7
    assert [line for line in lines if "(active)" in line][0].startswith("gpt-4o ")


def test_config_masks_api_key(capsys, configured_env):
    cli.main(["config"])

    settings = json.loads(capsys.readouterr().out)
    assert settings["is_configured"] is True
    assert settings["api_key"].endswith(API_KEY[-4:])
    assert API_KEY not in json.dumps(settings)


def test_encrypt_key_round_trips(capsys, configured_env):
    cli.main(["encrypt-key", "sk-new"])

    token = capsys.readouterr().out.strip()
    assert Encryptor(configured_env).decrypt(token) == "sk-new"


def test_generate_key(capsys):
    cli.main(["generate-key"])

    Fernet(capsys.readouterr().out.strip().encode("utf-8"))


def test_bad_crypt_key_exits_with_configuration_error(monkeypatch, capsys):
    monkeypatch.setenv("MAGEDIN_CRYPT_KEY", "not-a-key")

    assert cli.main(["config"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_malformed_scope_file_exits_with_configuration_error(monkeypatch, capsys, tmp_path):
    path = tmp_path / "scope.json"
    path.write_text('{"websites": 5}')
    monkeypatch.setenv("MAGEDIN_CHATGPT_CONFIG_FILE", str(path))

    assert cli.main(["config"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_serve_runs_http_api_with_uvicorn(monkeypatch):
    import uvicorn

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    assert cli.main(["serve", "--host", "127.0.0.1", "--port", "9001"]) == 0
    assert calls == [
        ("magedin_chatgpt.api.http_api:app", {"host": "127.0.0.1", "port": 9001, "reload": False})
    ]
