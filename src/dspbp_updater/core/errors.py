"""Errors raised by the updater."""


class UpdaterError(RuntimeError):
    """A step of the sync failed; the message carries the step's context."""
