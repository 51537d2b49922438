"""
Provide methods for working with participant profiles.

A profile can predate the account it eventually belongs to. Lookups by
e-mail therefore distinguish between profiles that are already linked to an
account and *unclaimed* ones, which a new signup may take over.

As in :mod:`.accounts`, nothing here commits.
"""

from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError

from .. import domain
from .exceptions import Unavailable
from .models import DBParticipant, db

logger = logging.getLogger(__name__)


def _to_domain(db_profile: DBParticipant) -> domain.Profile:
    return domain.Profile(
        profile_id=db_profile.participant_id,
        email=db_profile.participant_email,
        first_name=db_profile.participant_first_name,
        last_name=db_profile.participant_last_name,
        account_id=db_profile.user_id
    )


def get_profile_by_account(account_id: int) -> Optional[domain.Profile]:
    """Get the profile linked to an account, if there is one."""
    try:
        db_profile = db.session.query(DBParticipant) \
            .filter(DBParticipant.user_id == account_id) \
            .first()
    except SQLAlchemyError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    return _to_domain(db_profile) if db_profile is not None else None


def get_unclaimed_profile(email: str) -> Optional[domain.Profile]:
    """Get the oldest profile with an e-mail address and no account."""
    try:
        db_profile = db.session.query(DBParticipant) \
            .filter(DBParticipant.participant_email == email) \
            .filter(DBParticipant.user_id.is_(None)) \
            .order_by(DBParticipant.participant_id) \
            .first()
    except SQLAlchemyError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    return _to_domain(db_profile) if db_profile is not None else None


def resolve_profile(account: domain.Account) -> Optional[domain.Profile]:
    """
    Find the profile for an account.

    Prefers the profile linked by account id. Accounts created before
    profiles were linked fall back to an unclaimed profile with the same
    e-mail; a profile linked to some other account is never used.
    """
    profile = get_profile_by_account(account.account_id)
    if profile is None:
        logger.debug('No profile linked to account %s; trying e-mail',
                     account.account_id)
        profile = get_unclaimed_profile(account.email)
    return profile


def create_profile(email: str, first_name: str, last_name: str,
                   account_id: Optional[int] = None) -> domain.Profile:
    """Insert a new profile and flush it so that it gets an id."""
    db_profile = DBParticipant(
        participant_email=email,
        participant_first_name=first_name,
        participant_last_name=last_name,
        user_id=account_id
    )
    try:
        db.session.add(db_profile)
        db.session.flush()
    except SQLAlchemyError as e:
        raise Unavailable('Could not create profile') from e
    return _to_domain(db_profile)


def claim_profile(profile_id: int, account_id: int, first_name: str,
                  last_name: str) -> domain.Profile:
    """
    Link an unclaimed profile to an account.

    Names are only filled in where the profile's own are blank; a name that
    someone already entered is never replaced with signup form input.
    """
    try:
        db_profile = db.session.get(DBParticipant, profile_id)
    except SQLAlchemyError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    if db_profile is None:
        raise Unavailable(f'Profile {profile_id} disappeared while claiming')
    db_profile.user_id = account_id
    if not (db_profile.participant_first_name or '').strip():
        db_profile.participant_first_name = first_name
    if not (db_profile.participant_last_name or '').strip():
        db_profile.participant_last_name = last_name
    try:
        db.session.add(db_profile)
        db.session.flush()
    except SQLAlchemyError as e:
        raise Unavailable('Could not link profile') from e
    return _to_domain(db_profile)
