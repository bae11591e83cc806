"""DeckVault: multi-tenant slide and presentation library backend."""

__version__ = "1.0.0"
