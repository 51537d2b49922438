"""
Account creation, credential verification and session identities.

:func:`sign_up` and :func:`log_in` never raise for expected failures. They
return an :class:`.domain.AuthOutcome` carrying either the
:class:`.domain.SessionIdentity` to place in the session or the
:class:`.domain.Failure` to report. Unexpected problems with the database are
logged here in full and reported to the caller only as
:attr:`.Failure.STORE_UNAVAILABLE`.

E-mail uniqueness is enforced by the database, not by this module: two
concurrent signups for the same address may both pass the existence check,
but only one insert can succeed. The loser's uniqueness violation is reported
as :attr:`.Failure.DUPLICATE_ACCOUNT`, same as if the check had caught it.
"""

from typing import MutableMapping, Any, Optional
import logging

from flask import current_app

from .. import domain
from ..domain import AuthOutcome, Failure
from ..auth import sessions
from . import accounts, profiles, passwords, util
from .exceptions import DuplicateEmail, PasswordAuthenticationFailed

logger = logging.getLogger(__name__)


def _rounds() -> int:
    return int(current_app.config.get('BCRYPT_ROUNDS',
                                      passwords.DEFAULT_ROUNDS))


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ''


def sign_up(first_name: Optional[str], last_name: Optional[str],
            email: Optional[str], password: Optional[str],
            confirm_password: Optional[str]) -> AuthOutcome:
    """
    Create a new account, claiming an existing unclaimed profile if any.

    Parameters
    ----------
    first_name : str
    last_name : str
    email : str
        Normalized (trimmed, lowercased) before any lookup or write.
    password : str
    confirm_password : str
        Must equal ``password``.

    Returns
    -------
    :class:`.domain.AuthOutcome`
        On success, the identity of the new (``user``-role) account.

    """
    first_name = _clean(first_name)
    last_name = _clean(last_name)
    email = domain.normalize_email(email)
    if not (first_name and last_name and email and password
            and confirm_password):
        logger.debug('Signup missing required fields')
        return AuthOutcome.failed(Failure.VALIDATION)
    if password != confirm_password:
        logger.debug('Signup passwords do not match')
        return AuthOutcome.failed(Failure.PASSWORD_MISMATCH)

    try:
        with util.transaction():
            outcome = _register(first_name, last_name, email, password)
    except DuplicateEmail:
        logger.info('Concurrent signup lost the race for %s', email)
        return AuthOutcome.failed(Failure.DUPLICATE_ACCOUNT)
    except Exception:
        logger.exception('Error during signup for %s', email)
        return AuthOutcome.failed(Failure.STORE_UNAVAILABLE)

    if outcome.ok:
        logger.info('Created account %s', outcome.identity.account_id)
    return outcome


def _register(first_name: str, last_name: str, email: str,
              password: str) -> AuthOutcome:
    """Do the writes for :func:`sign_up`; must run inside a transaction."""
    if accounts.does_email_exist(email):
        logger.debug('Account already exists for %s', email)
        return AuthOutcome.failed(Failure.DUPLICATE_ACCOUNT)

    unclaimed = profiles.get_unclaimed_profile(email)
    secret_hash = passwords.hash_password(password, rounds=_rounds())
    account = accounts.create_account(email, secret_hash, role=domain.USER)

    if unclaimed is not None:
        logger.debug('Claiming profile %s for account %s',
                     unclaimed.profile_id, account.account_id)
        profile = profiles.claim_profile(unclaimed.profile_id,
                                         account.account_id,
                                         first_name, last_name)
    else:
        profile = profiles.create_profile(email, first_name, last_name,
                                          account_id=account.account_id)
    return AuthOutcome.success(domain.SessionIdentity.build(account, profile))


def log_in(email: Optional[str], password: Optional[str]) -> AuthOutcome:
    """
    Verify credentials and build a session identity.

    Unknown e-mail and wrong password both yield
    :attr:`.Failure.INVALID_CREDENTIALS`; only the logs tell them apart.
    """
    email = domain.normalize_email(email)
    if not email or not password:
        logger.debug('Login missing email or password')
        return AuthOutcome.failed(Failure.VALIDATION)

    try:
        with util.transaction():
            return _authenticate(email, password)
    except Exception:
        logger.exception('Error during login for %s', email)
        return AuthOutcome.failed(Failure.STORE_UNAVAILABLE)


def _authenticate(email: str, password: str) -> AuthOutcome:
    account = accounts.get_account_by_email(email)
    if account is None:
        logger.debug('Login failed, no such account: %s', email)
        return AuthOutcome.failed(Failure.INVALID_CREDENTIALS)
    if not account.is_active:
        logger.debug('Login refused, account %s is inactive',
                     account.account_id)
        return AuthOutcome.failed(Failure.ACCOUNT_INACTIVE)
    try:
        passwords.check_password(password, account.secret_hash)
    except PasswordAuthenticationFailed as e:
        logger.debug('Login failed for account %s: %s',
                     account.account_id, e)
        return AuthOutcome.failed(Failure.INVALID_CREDENTIALS)

    profile = profiles.resolve_profile(account)
    logger.debug('Authenticated account %s', account.account_id)
    return AuthOutcome.success(domain.SessionIdentity.build(account, profile))


def log_out(session: MutableMapping[str, Any]) -> None:
    """Remove the caller's identity from their session. Never fails."""
    sessions.destroy(session)


def register_admin(email: str, password: str, first_name: str,
                   last_name: str) -> domain.SessionIdentity:
    """
    Create an administrator, or promote the existing account for ``email``.

    Used from the command line; raises rather than returning a failure.
    """
    email = domain.normalize_email(email)
    if not (email and password and first_name and last_name):
        raise ValueError('email, password and names are all required')
    with util.transaction():
        account = accounts.get_account_by_email(email)
        if account is None:
            secret_hash = passwords.hash_password(password, rounds=_rounds())
            account = accounts.create_account(email, secret_hash,
                                              role=domain.ADMIN)
        elif account.role != domain.ADMIN:
            account = accounts.set_role(account.account_id, domain.ADMIN)

        profile = profiles.resolve_profile(account)
        if profile is None:
            profile = profiles.create_profile(email, first_name, last_name,
                                              account_id=account.account_id)
        elif not profile.is_claimed:
            profile = profiles.claim_profile(profile.profile_id,
                                             account.account_id,
                                             first_name, last_name)
    return domain.SessionIdentity.build(account, profile)
