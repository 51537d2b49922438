"""
Provide methods for working with login accounts.

None of these functions commit. Callers are expected to wrap them in
:func:`.util.transaction` so that several writes succeed or fail together.
"""

from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .. import domain
from .exceptions import DuplicateEmail, NoSuchAccount, Unavailable
from .models import DBAccount, db

logger = logging.getLogger(__name__)


def _to_domain(db_account: DBAccount) -> domain.Account:
    return domain.Account(
        account_id=db_account.user_id,
        email=db_account.email,
        secret_hash=db_account.password_hash,
        role=db_account.role,
        is_active=bool(db_account.is_active)
    )


def get_account_by_email(email: str) -> Optional[domain.Account]:
    """
    Retrieve an account by its (already normalized) e-mail address.

    Parameters
    ----------
    email : str

    Returns
    -------
    :class:`.domain.Account` or None

    Raises
    ------
    :class:`.Unavailable`
        When there is a problem querying the database.

    """
    try:
        db_account = db.session.query(DBAccount) \
            .filter(DBAccount.email == email) \
            .first()
    except SQLAlchemyError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    if db_account is None:
        return None
    return _to_domain(db_account)


def does_email_exist(email: str) -> bool:
    """Determine whether an account with a particular address exists."""
    return get_account_by_email(email) is not None


def create_account(email: str, secret_hash: str,
                   role: str = domain.USER) -> domain.Account:
    """
    Insert a new, active account.

    The row is flushed so that its identifier is available, but is not
    committed. After either exception below the session must be rolled back,
    which :func:`.util.transaction` does.

    Raises
    ------
    :class:`.DuplicateEmail`
        When the database rejects the row because the e-mail is taken. This
        covers the race in which two signups pass the existence check
        concurrently.
    :class:`.Unavailable`
        When there is some other problem talking to the database.

    """
    if role not in domain.ROLES:
        raise ValueError(f'Unknown role: {role}')
    db_account = DBAccount(email=email, password_hash=secret_hash, role=role,
                           is_active=True)
    try:
        db.session.add(db_account)
        db.session.flush()
    except IntegrityError as e:
        logger.debug('Uniqueness violation creating account for %s', email)
        raise DuplicateEmail('An account with that email already exists') \
            from e
    except SQLAlchemyError as e:
        raise Unavailable('Could not create account') from e
    return _to_domain(db_account)


def set_role(account_id: int, role: str) -> domain.Account:
    """Change the role of an existing account (administrative use)."""
    if role not in domain.ROLES:
        raise ValueError(f'Unknown role: {role}')
    try:
        db_account = db.session.get(DBAccount, account_id)
    except SQLAlchemyError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    if db_account is None:
        raise NoSuchAccount(f'No account with id {account_id}')
    db_account.role = role
    db.session.add(db_account)
    return _to_domain(db_account)
