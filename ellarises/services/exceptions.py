"""Exceptions raised by the store services."""


class Unavailable(RuntimeError):
    """The database could not be reached, or failed unexpectedly."""


class DuplicateEmail(RuntimeError):
    """An account with the requested e-mail address already exists."""


class NoSuchAccount(RuntimeError):
    """Account does not exist."""


class PasswordAuthenticationFailed(RuntimeError):
    """Password is not correct."""
