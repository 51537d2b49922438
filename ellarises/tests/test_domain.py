"""Tests for :mod:`ellarises.domain`."""

from unittest import TestCase

from .. import domain
from ..domain import AuthOutcome, Failure


class TestSessionIdentity(TestCase):
    """Tests for :class:`.domain.SessionIdentity`."""

    def setUp(self):
        self.account = domain.Account(account_id=3, email='a@b.com',
                                      secret_hash='hash')
        self.profile = domain.Profile(profile_id=5, email='a@b.com',
                                      first_name='Amy', last_name='Lee',
                                      account_id=3)

    def test_build(self):
        """Account and profile fields are combined."""
        identity = domain.SessionIdentity.build(self.account, self.profile)
        self.assertEqual(identity.account_id, 3)
        self.assertEqual(identity.profile_id, 5)
        self.assertEqual(identity.display_name, 'Amy')
        self.assertFalse(identity.is_admin)

    def test_build_without_profile(self):
        """The e-mail address stands in for a name."""
        identity = domain.SessionIdentity.build(self.account)
        self.assertIsNone(identity.profile_id)
        self.assertEqual(identity.display_name, 'a@b.com')

    def test_session_round_trip(self):
        """What goes into the session comes back out."""
        identity = domain.SessionIdentity.build(
            self.account._replace(role=domain.ADMIN), self.profile
        )
        data = identity.to_session()
        self.assertNotIn('secret_hash', data)
        self.assertEqual(domain.SessionIdentity.from_session(data), identity)
        self.assertTrue(identity.is_admin)

    def test_from_empty_session(self):
        """Nothing in the session means no identity."""
        self.assertIsNone(domain.SessionIdentity.from_session(None))
        self.assertIsNone(domain.SessionIdentity.from_session({}))


class TestAuthOutcome(TestCase):
    """Tests for :class:`.domain.AuthOutcome`."""

    def test_success(self):
        """A successful outcome has an identity and no failure."""
        identity = domain.SessionIdentity(account_id=1, email='a@b.com',
                                          role=domain.USER)
        outcome = AuthOutcome.success(identity)
        self.assertTrue(outcome.ok)
        self.assertIsNone(outcome.failure)

    def test_failure(self):
        """A failed outcome carries a caller-safe message."""
        outcome = AuthOutcome.failed(Failure.ACCOUNT_INACTIVE)
        self.assertFalse(outcome.ok)
        self.assertIsNone(outcome.identity)
        self.assertEqual(outcome.failure.message,
                         'This account is currently inactive.')
