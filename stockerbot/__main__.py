"""Entry point for running stockerbot as a module."""

from stockerbot.cli.commands import app

if __name__ == "__main__":
    app()
