"""MagedIn ChatGPT connector.

Architectural role:
    Lets store administrators configure OpenAI's ChatGPT completion API and
    invoke it through a provider adapter that always returns a normalized
    response record.

Package split:
    - `config`: scoped settings store, API key encryption and the ChatGPT
      configuration provider.
    - `llm`: request/response records, adapter interface, the ChatGPT adapter
      and the selectable model list.
    - `api`: operator-facing CLI and HTTP adapters.
"""

__version__ = "1.0.0"
