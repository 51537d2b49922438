"""Password hashing."""

import logging

import bcrypt

from .exceptions import PasswordAuthenticationFailed

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12
MAX_PASSWORD_BYTES = 72
"""bcrypt only considers the first 72 bytes of its input."""


def _encode(password: str) -> bytes:
    encoded = password.encode('utf-8')
    if len(encoded) > MAX_PASSWORD_BYTES:
        logger.debug('Password longer than %i bytes; truncating',
                     MAX_PASSWORD_BYTES)
        encoded = encoded[:MAX_PASSWORD_BYTES]
    return encoded


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Generate a salted bcrypt hash of a password."""
    hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode('ascii')


def check_password(password: str, encrypted: str) -> bool:
    """
    Check a password against a bcrypt hash.

    Raises
    ------
    :class:`PasswordAuthenticationFailed`
        If the password does not match, or the stored hash is unusable.

    """
    try:
        matches = bcrypt.checkpw(_encode(password), encrypted.encode('ascii'))
    except (ValueError, UnicodeEncodeError) as e:
        raise PasswordAuthenticationFailed('Stored hash is malformed') from e
    if not matches:
        raise PasswordAuthenticationFailed('Incorrect password')
    return True
