"""
Command-line adapter for the ChatGPT connector.

Architectural role:
- Exposes one-shot queries, an interactive chat loop and configuration
  helpers to store operators.
- Delegates all model invocation to `ChatGptAdapter.query`.

Commands:
- `query MESSAGE`: run one completion and print the content (or JSON record).
- `chat`: interactive loop; each turn is an independent single-message query.
- `models`: list selectable model identifiers and labels.
- `config`: print the resolved configuration with the API key masked.
- `encrypt-key VALUE`: print an encrypted value for `MAGEDIN_AI_CHATGPT_API_KEY`.
- `generate-key`: print a new value for `MAGEDIN_CRYPT_KEY`.
- `serve`: run the HTTP API (`magedin_chatgpt.api.http_api:app`) with uvicorn.

Error handling strategy:
- Failed queries print the error message to stderr and exit with status 1.
- EOF and keyboard interrupts end the chat loop without traceback output.
- `ConfigurationError` during wiring prints a message and exits with status 2.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Configures root logging from `--log-level` or `LOG_LEVEL`.
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import json
import logging
import os
import sys

from magedin_chatgpt.config.encryptor import generate_key
from magedin_chatgpt.config.settings import ChatGptConfig
from magedin_chatgpt.errors import ConfigurationError
from magedin_chatgpt.llm import model_options
from magedin_chatgpt.llm.chatgpt_adapter import ChatGptAdapter
from magedin_chatgpt.llm.types import AiRequest


def mask_secret(value):
    """Keep the last four characters of a secret visible."""
    if not value:
        return None
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


def build_request(message, system=None, max_tokens=None, temperature=None):
    context = {"system_message": system} if system else {}
    return AiRequest(
        message=message,
        context=context,
        max_tokens=max_tokens,
        temperature=temperature,
    )


# =========================================================
# COMMANDS
# =========================================================

def cmd_query(args, config):
    adapter = ChatGptAdapter(config)
    response = adapter.query(
        build_request(args.message, args.system, args.max_tokens, args.temperature)
    )

    if args.json:
        print(json.dumps(response.to_dict(), indent=2))
    elif response.success:
        print(response.content)

    if not response.success:
        print(f"Error: {response.error_message}", file=sys.stderr)
        return 1
    return 0


def cmd_chat(args, config):
    """
    Run the interactive loop.

    Each turn sends only the current line plus the optional system message.
    Empty input is ignored; `exit`/`quit` leave the loop.
    """
    adapter = ChatGptAdapter(config)

    if not adapter.is_available():
        print("ChatGPT is not configured. Run `config` to inspect settings.")
        return 1

    print(f"ChatGPT chat started with model {config.get_model()}. (Type 'exit' to quit)")
    print("-" * 60)

    while True:

        try:
            question = input("Question: ").strip()

        except EOFError:
            print("\nSession ended.")
            break

        except KeyboardInterrupt:
            print("\nInterrupted.")
            break

        if not question:
            continue

        if question.lower() in ("exit", "quit"):
            print("Shutting down.")
            break

        response = adapter.query(build_request(question, args.system))

        print("\nResponse:\n")
        if response.success:
            print(response.content)
            if response.tokens_used is not None:
                print(f"\n[tokens used: {response.tokens_used}]")
        else:
            print(f"Error: {response.error_message}")

        print("\n" + "-" * 60 + "\n")

    return 0


def cmd_models(args, config):
    current = config.get_model()
    for option in model_options.to_option_array():
        marker = " (active)" if option["value"] == current else ""
        print(f"{option['value']:<20} {option['label']}{marker}")
    return 0


def cmd_config(args, config):
    settings = config.get_configuration()
    settings["api_key"] = mask_secret(settings["api_key"])
    print(json.dumps(settings, indent=2))
    return 0


def cmd_encrypt_key(args, config):
    if config.encryptor.plaintext_mode:
        print("Warning: MAGEDIN_CRYPT_KEY is not set; value is stored as plaintext.", file=sys.stderr)
    print(config.encryptor.encrypt(args.value))
    return 0


def cmd_generate_key(args, config):
    print(generate_key())
    return 0


def cmd_serve(args, config):
    import uvicorn

    uvicorn.run(
        "magedin_chatgpt.api.http_api:app",
        host=args.host,
        port=args.port,
        reload=False,
    )
    return 0


# =========================================================
# MAIN
# =========================================================

def build_parser():
    parser = argparse.ArgumentParser(
        prog="magedin-chatgpt",
        description="Configure and query OpenAI ChatGPT",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    query = sub.add_parser("query", help="Send one message")
    query.add_argument("message")
    query.add_argument("--system", default=None, help="System message sent before the user message")
    query.add_argument("--max-tokens", type=int, default=None)
    query.add_argument("--temperature", type=float, default=None)
    query.add_argument("--json", action="store_true", help="Print the full response record as JSON")
    query.set_defaults(func=cmd_query)

    chat = sub.add_parser("chat", help="Interactive chat loop")
    chat.add_argument("--system", default=None)
    chat.set_defaults(func=cmd_chat)

    sub.add_parser("models", help="List selectable models").set_defaults(func=cmd_models)
    sub.add_parser("config", help="Show resolved configuration").set_defaults(func=cmd_config)

    encrypt = sub.add_parser("encrypt-key", help="Encrypt an API key for storage")
    encrypt.add_argument("value")
    encrypt.set_defaults(func=cmd_encrypt_key)

    sub.add_parser("generate-key", help="Generate a new encryption key").set_defaults(
        func=cmd_generate_key
    )

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=os.getenv("HOST") or "127.0.0.1")
    serve.add_argument("--port", type=int, default=int(os.getenv("PORT") or 8000))
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=str(args.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.func in (cmd_generate_key, cmd_serve):
        return args.func(args, None)

    try:
        config = ChatGptConfig.from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
