"""Defines the core data structures for the Ella Rises site."""

from typing import Any, Dict, NamedTuple, Optional
from datetime import datetime
from enum import Enum

ADMIN = 'admin'
USER = 'user'
ROLES = (ADMIN, USER)
"""Account roles. Self-service signup always produces :const:`USER`."""


def normalize_email(email: Optional[str]) -> str:
    """Trim and lowercase an e-mail address; ``None`` becomes ``''``."""
    return email.strip().lower() if email else ''


class Account(NamedTuple):
    """Authentication record, owned by the credential store."""

    account_id: int
    """Generated on creation; never changes."""

    email: str
    """Normalized e-mail address. Unique across accounts."""

    secret_hash: str
    """bcrypt hash of the password."""

    role: str = USER
    """One of :const:`ROLES`."""

    is_active: bool = True
    """Inactive accounts cannot log in."""

    def __repr__(self) -> str:
        """Represent the account without its password hash."""
        return (f'Account(account_id={self.account_id!r}, '
                f'email={self.email!r}, role={self.role!r}, '
                f'is_active={self.is_active!r})')


class Profile(NamedTuple):
    """
    Person-facing participant record.

    A profile may exist before any account does, e.g. when someone registers
    for an event with only an e-mail address. Such a profile has no
    ``account_id`` and is said to be *unclaimed*.
    """

    profile_id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    account_id: Optional[int] = None

    @property
    def is_claimed(self) -> bool:
        """Whether this profile is linked to an account."""
        return self.account_id is not None


class SessionIdentity(NamedTuple):
    """The value placed in the session after successful authentication."""

    account_id: int
    email: str
    role: str
    profile_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        """Whether this identity may use the administrative area."""
        return self.role == ADMIN

    @property
    def display_name(self) -> str:
        """First name if we have one, otherwise the e-mail address."""
        return self.first_name or self.email

    @classmethod
    def build(cls, account: Account,
              profile: Optional[Profile] = None) -> 'SessionIdentity':
        """Construct an identity from an account and (maybe) its profile."""
        return cls(
            account_id=account.account_id,
            email=account.email,
            role=account.role,
            profile_id=profile.profile_id if profile else None,
            first_name=profile.first_name if profile else None,
            last_name=profile.last_name if profile else None
        )

    def to_session(self) -> Dict[str, Any]:
        """Serialize for storage in the Flask session."""
        return dict(self._asdict())

    @classmethod
    def from_session(cls, data: Optional[Dict[str, Any]]) \
            -> Optional['SessionIdentity']:
        """Load an identity from session data; ``None`` if absent or stale."""
        if not data:
            return None
        try:
            return cls(**data)
        except TypeError:   # Written by an older version of this class.
            return None


class Failure(Enum):
    """The ways in which signup or login can fail, with caller messages."""

    VALIDATION = 'Please fill out all required fields.'
    PASSWORD_MISMATCH = 'Passwords do not match.'
    DUPLICATE_ACCOUNT = 'An account with that email already exists.'
    INVALID_CREDENTIALS = 'Invalid email or password.'
    ACCOUNT_INACTIVE = 'This account is currently inactive.'
    STORE_UNAVAILABLE = 'Something went wrong. Please try again.'

    @property
    def message(self) -> str:
        """Human-readable text safe to show the caller."""
        return str(self.value)


class AuthOutcome(NamedTuple):
    """Result of a signup or login attempt: an identity or a failure."""

    identity: Optional[SessionIdentity] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        """``True`` if the attempt produced an identity."""
        return self.failure is None and self.identity is not None

    @classmethod
    def success(cls, identity: SessionIdentity) -> 'AuthOutcome':
        return cls(identity=identity)

    @classmethod
    def failed(cls, failure: Failure) -> 'AuthOutcome':
        return cls(failure=failure)


class Event(NamedTuple):
    """A scheduled occurrence of a program event."""

    event_id: int
    name: str
    starts: Optional[datetime]
    ends: Optional[datetime] = None
    location: Optional[str] = None
    capacity: Optional[int] = None
    event_type: str = 'Event'
    description: str = ''
    recurrence_pattern: Optional[str] = None
