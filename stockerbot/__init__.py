"""stockerbot - Telegram-paired personal stock assistant."""

__version__ = "0.2.0"
__logo__ = "📈"
