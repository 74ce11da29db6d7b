"""
HTTP API adapter for the ChatGPT connector.

Architectural role:
- Expose the model option list, provider status and the query operation over
  HTTP.
- Enforce adapter-level input validation.
- Delegate model invocation to `ChatGptAdapter.query`.

Endpoint responsibilities:
- `GET /v1/models`: selectable models as OpenAI-style model metadata.
- `GET /v1/provider`: provider name, availability and supported features.
- `POST /v1/query`: validate input, build an `AiRequest`, return the
  normalized `AiResponse` record.

Input validation behavior:
- Body schema violations -> FastAPI/pydantic 422.
- Empty or blank `message` -> HTTP 400.

Error handling strategy:
- Provider failures are part of the response record (`success: false`) and
  are returned with HTTP 200.
- `ConfigurationError` while wiring the adapter (bad `MAGEDIN_CRYPT_KEY`,
  malformed scope file) -> structured HTTP 503 JSON error.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Builds the adapter lazily on first request; tests override `get_adapter`.
"""

from dotenv import load_dotenv

load_dotenv()

from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from magedin_chatgpt.config.settings import ChatGptConfig
from magedin_chatgpt.errors import ConfigurationError
from magedin_chatgpt.llm import model_options
from magedin_chatgpt.llm.chatgpt_adapter import ChatGptAdapter
from magedin_chatgpt.llm.types import AiRequest

app = FastAPI(title="MagedIn ChatGPT")


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=503, content={"error": f"Configuration error: {exc}"})


@lru_cache(maxsize=1)
def get_adapter() -> ChatGptAdapter:
    """Return the process-wide adapter wired from the environment."""
    return ChatGptAdapter(ChatGptConfig.from_env())


# ============================================================
# Request Schema
# ============================================================

class QueryRequest(BaseModel):
    """Body of `POST /v1/query`."""

    message: str
    context: dict[str, Any] | None = None
    max_tokens: int | None = None
    temperature: float | None = None


# ============================================================
# Model Listing
# ============================================================

@app.get("/v1/models")
def list_models():
    """
    Return selectable ChatGPT models as OpenAI-style model metadata.

    Response formatting:
    - `object: "list"`
    - `data[]` entries with `id`, `object`, `owned_by`, `label`
    """
    return {
        "object": "list",
        "data": [
            {
                "id": option["value"],
                "object": "model",
                "owned_by": "openai",
                "label": option["label"],
            }
            for option in model_options.to_option_array()
        ],
    }


@app.get("/v1/provider")
def provider_status(adapter: ChatGptAdapter = Depends(get_adapter)):
    return {
        "provider": adapter.get_provider_name(),
        "available": adapter.is_available(),
        "features": adapter.get_supported_features(),
    }


# ============================================================
# Query
# ============================================================

@app.post("/v1/query")
def query(body: QueryRequest, adapter: ChatGptAdapter = Depends(get_adapter)):
    """
    Run one completion and return the normalized response record.

    Input validation behavior:
    - Returns HTTP 400 for an empty or blank message.
    """
    if not body.message.strip():
        return JSONResponse(status_code=400, content={"error": "No message provided"})

    request = AiRequest(
        message=body.message,
        context=body.context or {},
        max_tokens=body.max_tokens,
        temperature=body.temperature,
    )

    return adapter.query(request).to_dict()
