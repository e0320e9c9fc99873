"""Assistant operations over a vault."""

from .core import Colors, VaultAssistant

__all__ = ["Colors", "VaultAssistant"]
