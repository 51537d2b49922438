"""
Keep a :class:`.domain.SessionIdentity` in the caller's session.

The session is passed in explicitly (normally :data:`flask.session`) rather
than looked up here, so that these helpers have no hidden request state.
"""

from typing import Any, MutableMapping, Optional
import logging

from flask import current_app

from .. import domain

logger = logging.getLogger(__name__)

DEFAULT_KEY = 'user'


def _key() -> str:
    return str(current_app.config.get('SESSION_IDENTITY_KEY', DEFAULT_KEY))


def bind(session: MutableMapping[str, Any],
         identity: domain.SessionIdentity) -> None:
    """
    Store ``identity`` in a fresh session.

    Anything left over from before authentication is discarded first.
    """
    session.clear()
    session[_key()] = identity.to_session()
    logger.debug('Bound account %s to session', identity.account_id)


def current(session: MutableMapping[str, Any]) \
        -> Optional[domain.SessionIdentity]:
    """Get the identity in the session, or ``None`` if anonymous."""
    return domain.SessionIdentity.from_session(session.get(_key()))


def destroy(session: MutableMapping[str, Any]) -> None:
    """Drop everything in the session; problems are logged, not raised."""
    try:
        session.clear()
    except Exception as e:
        logger.error('Could not destroy session: %s', e)
