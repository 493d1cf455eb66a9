"""
DICTIO: a Discord dictionary and thesaurus bot.

Run the bot with:
    python -m dictio_bot
"""

__all__ = [
    "bot",
    "commands",
    "config",
    "dictionary_client",
    "formatter",
    "models",
    "service",
    "suggestions",
    "yaml_config",
]
