"""
Controllers for signup, login and logout.

These return ``(data, status_code, headers)``. Every POST ends in a 303
redirect, and ``data['flash']`` holds the ``(category, message)`` the route
should flash before redirecting. On success the
:class:`.domain.SessionIdentity` has already been bound to the session that
was passed in.
"""

from typing import Any, Dict, MutableMapping, Optional, Tuple
from http import HTTPStatus as status
import logging

from flask import current_app, url_for
from werkzeug.datastructures import MultiDict

from .. import domain
from ..auth import sessions
from ..domain import AuthOutcome, Failure
from ..next_page import landing_endpoint
from ..services import identity
from .forms import LoginForm, SignupForm

logger = logging.getLogger(__name__)

ResponseData = Tuple[Dict[str, Any], int, Dict[str, str]]

LOGIN_WELCOME = 'Welcome back to Ella Rises.'
SIGNUP_WELCOME = 'Your account was created. Welcome to Ella Rises.'


def _redirect(endpoint: str, data: Dict[str, Any]) -> ResponseData:
    return data, status.SEE_OTHER, {'Location': url_for(endpoint)}


def _landing(identity: domain.SessionIdentity,
             data: Dict[str, Any]) -> ResponseData:
    return _redirect(landing_endpoint(identity), data)


def already_authenticated(session: MutableMapping[str, Any]) \
        -> Optional[ResponseData]:
    """If the session holds an identity, redirect to its landing area."""
    current = sessions.current(session)
    if current is None:
        return None
    return _landing(current, {})


def login(method: str, form_data: MultiDict,
          session: MutableMapping[str, Any]) -> ResponseData:
    """
    Provide the login form, or log the user in.

    Parameters
    ----------
    method : str
        ``GET`` or ``POST``.
    form_data : MultiDict
        Should include ``email`` and ``password``.
    session : MutableMapping
        The caller's session; receives the identity on success.

    Returns
    -------
    dict
        Additional data to add to the response.
    int
        Status code. 303 (See Other) after a POST.
    dict
        Headers to add to the response.

    """
    if method == 'GET':
        logger.debug('Request for login form')
        return {'form': LoginForm()}, status.OK, {}

    logger.debug('Login form submitted')
    form = LoginForm(form_data)
    if form.validate():
        outcome = identity.log_in(form.email.data, form.password.data)
    else:
        outcome = AuthOutcome.failed(Failure.VALIDATION)

    if not outcome.ok:
        logger.debug('Login failed: %s', outcome.failure.name)
        data = {'flash': ('error', outcome.failure.message)}
        return _redirect(current_app.config['LOGIN_PAGE'], data)

    sessions.bind(session, outcome.identity)
    return _landing(outcome.identity, {'flash': ('success', LOGIN_WELCOME)})


def signup(method: str, form_data: MultiDict,
           session: MutableMapping[str, Any]) -> ResponseData:
    """
    Provide the signup form, or create an account and log the user in.

    A signup for an address that already has an account is sent to the login
    page rather than back to the signup form.
    """
    if method == 'GET':
        logger.debug('Request for signup form')
        return {'form': SignupForm()}, status.OK, {}

    logger.debug('Signup form submitted')
    form = SignupForm(form_data)
    if form.validate():
        outcome = identity.sign_up(form.first_name.data, form.last_name.data,
                                   form.email.data, form.password.data,
                                   form.confirm_password.data)
    else:
        outcome = AuthOutcome.failed(Failure.VALIDATION)

    if not outcome.ok:
        logger.debug('Signup failed: %s', outcome.failure.name)
        data = {'flash': ('error', outcome.failure.message)}
        if outcome.failure is Failure.DUPLICATE_ACCOUNT:
            return _redirect(current_app.config['LOGIN_PAGE'], data)
        return _redirect(current_app.config['SIGNUP_PAGE'], data)

    sessions.bind(session, outcome.identity)
    return _landing(outcome.identity, {'flash': ('success', SIGNUP_WELCOME)})


def logout(session: MutableMapping[str, Any]) -> ResponseData:
    """Log the user out, and redirect to the public landing page."""
    logger.debug('Request to log out')
    identity.log_out(session)
    return _redirect(current_app.config['PUBLIC_LANDING'], {})
