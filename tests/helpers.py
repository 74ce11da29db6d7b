"""Test doubles for the HTTP layer."""

API_KEY = "sk-test-1234567890"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else str(payload))

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for `requests.Session`; returns queued responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def completion_body(content="hello", total_tokens=42):
    body = {
        "id": "chatcmpl-abc",
        "object": "chat.completion",
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }
    if total_tokens is not None:
        body["usage"] = {
            "prompt_tokens": 10,
            "completion_tokens": total_tokens - 10,
            "total_tokens": total_tokens,
        }
    return body
