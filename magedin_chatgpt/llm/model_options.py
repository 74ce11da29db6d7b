"""Selectable ChatGPT models for administrative configuration.

Static data only. The first entry matches the configuration default model.
"""

MODELS = {
    "gpt-3.5-turbo": "GPT-3.5 Turbo",
    "gpt-3.5-turbo-16k": "GPT-3.5 Turbo 16K",
    "gpt-4": "GPT-4",
    "gpt-4-32k": "GPT-4 32K",
    "gpt-4-turbo": "GPT-4 Turbo",
    "gpt-4o": "GPT-4o",
    "gpt-4o-mini": "GPT-4o Mini",
}


def to_option_array():
    """Return `[{"value": id, "label": label}, ...]` in declaration order."""
    return [{"value": value, "label": label} for value, label in MODELS.items()]


def is_known_model(model_id):
    return model_id in MODELS
