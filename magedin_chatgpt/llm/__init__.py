"""LLM access package.

Architectural role:
    Provides the request/response records, the provider adapter interface and
    the ChatGPT transport adapter used by the CLI and HTTP layers.

Module split:
    - `types`: `AiRequest` / `AiResponse` records.
    - `base`: abstract provider adapter interface.
    - `chatgpt_adapter`: payload construction, HTTP transport and response
      normalization for OpenAI chat completions.
    - `model_options`: selectable model identifiers and labels.
"""
