"""Command line interface for the blueprint updater."""
