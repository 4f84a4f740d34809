"""CLI module for stockerbot."""
