"""
Role-based protection for Flask routes.

:func:`scoped` reads the :class:`.domain.SessionIdentity` from the session and
passes it to the decorated route as the ``identity`` keyword argument, e.g.:

.. code-block:: python

   @blueprint.route('/my-journey')
   @scoped()
   def overview(identity: domain.SessionIdentity) -> Response:
       ...

- If there is no identity, the caller is sent to the login page with a flash
  message explaining why.
- If a role is required and the identity does not have it,
  :class:`Forbidden` is raised.
"""

from typing import Any, Callable, Optional
from functools import wraps
import logging

from flask import current_app, flash, redirect, session, url_for
from werkzeug.exceptions import Forbidden

from . import sessions

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = 'Please log in to access My Journey.'


def scoped(role: Optional[str] = None,
           message: str = LOGIN_REQUIRED) -> Callable:
    """
    Generate a decorator to enforce authentication and, optionally, a role.

    Parameters
    ----------
    role : str
        The role (see :const:`.domain.ROLES`) required to use the decorated
        route. If not provided, any authenticated identity will do.
    message : str
        Flashed to anonymous callers before they are redirected to log in.

    """
    def protector(func: Callable) -> Callable:
        """Decorator that provides role enforcement."""
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            identity = sessions.current(session)
            if identity is None:
                logger.debug('No identity in session; redirecting to login')
                flash(message, 'error')
                return redirect(url_for(current_app.config['LOGIN_PAGE']))
            if role and identity.role != role:
                logger.debug('Account %s lacks role %s',
                             identity.account_id, role)
                raise Forbidden('Access denied')
            kwargs['identity'] = identity
            return func(*args, **kwargs)
        return wrapper
    return protector
