"""Operator-facing adapter package.

Architectural role:
- Defines the external interaction boundary for the CLI and HTTP interfaces.
- Performs transport-level validation and response shaping.
- Delegates model invocation to `magedin_chatgpt.llm.chatgpt_adapter`.
"""
