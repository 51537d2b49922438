"""Tests for :mod:`ellarises.services.identity`."""

from unittest import TestCase, mock
import string

from hypothesis import given
from hypothesis import strategies as st
from sqlalchemy.exc import OperationalError

from ... import domain
from ...domain import Failure
from .. import accounts, identity, passwords, profiles, util
from ..exceptions import Unavailable
from ..models import DBAccount, DBParticipant, db
from .util import temporary_db

PASSWORD = 'correct horse'


def sign_up(email='a@b.com', first_name='Amy', last_name='Lee',
            password=PASSWORD, confirm_password=PASSWORD):
    return identity.sign_up(first_name, last_name, email, password,
                            confirm_password)


def count(model):
    return db.session.query(model).count()


class TestNormalizeEmail(TestCase):
    """E-mail addresses are compared trimmed and lowercased."""

    @given(st.text(alphabet=string.ascii_letters + string.digits + '@.+-_'),
           st.text(alphabet=' \t'), st.text(alphabet=' \t'))
    def test_idempotent(self, email, before, after):
        """Normalizing twice is the same as normalizing once."""
        once = domain.normalize_email(before + email + after)
        self.assertEqual(domain.normalize_email(once), once)
        self.assertEqual(once, email.lower())

    def test_none(self):
        """A missing address normalizes to the empty string."""
        self.assertEqual(domain.normalize_email(None), '')


class TestSignUp(TestCase):
    """Tests for :func:`.identity.sign_up`."""

    def test_new_person(self):
        """Signup with a fresh address creates an account and a profile."""
        with temporary_db():
            outcome = sign_up()
            self.assertTrue(outcome.ok)
            self.assertEqual(outcome.identity.role, domain.USER)
            self.assertEqual(outcome.identity.email, 'a@b.com')
            self.assertEqual(outcome.identity.first_name, 'Amy')
            self.assertIsNotNone(outcome.identity.profile_id)
            self.assertEqual(count(DBAccount), 1)
            self.assertEqual(count(DBParticipant), 1)

    def test_password_is_hashed(self):
        """The stored secret is a hash, not the password."""
        with temporary_db():
            sign_up()
            account = accounts.get_account_by_email('a@b.com')
            self.assertNotEqual(account.secret_hash, PASSWORD)

    def test_missing_fields(self):
        """Every field is required, and nothing is written without them."""
        with temporary_db():
            for missing in ['email', 'first_name', 'last_name', 'password',
                            'confirm_password']:
                outcome = sign_up(**{missing: '  ' if 'name' in missing
                                     else ''})
                self.assertEqual(outcome.failure, Failure.VALIDATION,
                                 f'{missing} should be required')
            self.assertEqual(count(DBAccount), 0)

    def test_password_mismatch(self):
        """The confirmation must match."""
        with temporary_db():
            outcome = sign_up(confirm_password='correct h0rse')
            self.assertEqual(outcome.failure, Failure.PASSWORD_MISMATCH)
            self.assertEqual(outcome.failure.message,
                             'Passwords do not match.')
            self.assertEqual(count(DBAccount), 0)

    def test_duplicate_after_normalization(self):
        """Case and surrounding whitespace do not make a new address."""
        with temporary_db():
            self.assertTrue(sign_up().ok)
            outcome = sign_up(email='  A@B.COM ')
            self.assertEqual(outcome.failure, Failure.DUPLICATE_ACCOUNT)
            self.assertEqual(count(DBAccount), 1)
            self.assertEqual(count(DBParticipant), 1)

    def test_concurrent_duplicate(self):
        """Losing the race at the database is still a duplicate."""
        with temporary_db():
            self.assertTrue(sign_up().ok)
            with mock.patch.object(accounts, 'does_email_exist',
                                   return_value=False):
                outcome = sign_up(first_name='Amelia')
            self.assertEqual(outcome.failure, Failure.DUPLICATE_ACCOUNT)
            self.assertEqual(count(DBAccount), 1)
            self.assertEqual(count(DBParticipant), 1)

    def test_claims_existing_profile(self):
        """A profile created by event registration is claimed, not copied."""
        with temporary_db():
            with util.transaction() as session:
                session.add(DBParticipant(participant_email='a@b.com',
                                          participant_first_name='Amy',
                                          participant_last_name=''))
            outcome = sign_up(email='A@B.com', first_name='Amy',
                              last_name='Lee')
            self.assertTrue(outcome.ok)
            self.assertEqual(count(DBParticipant), 1)

            db_profile = db.session.query(DBParticipant).one()
            self.assertEqual(db_profile.participant_last_name, 'Lee')
            self.assertEqual(db_profile.participant_first_name, 'Amy')
            self.assertEqual(db_profile.user_id, outcome.identity.account_id)
            self.assertEqual(outcome.identity.profile_id,
                             db_profile.participant_id)

    def test_failed_profile_write_rolls_back_account(self):
        """If the profile cannot be written, there is no account either."""
        with temporary_db():
            with mock.patch.object(profiles, 'create_profile',
                                   side_effect=Unavailable('nope')):
                outcome = sign_up()
            self.assertEqual(outcome.failure, Failure.STORE_UNAVAILABLE)
            self.assertEqual(count(DBAccount), 0)
            self.assertEqual(count(DBParticipant), 0)
            self.assertTrue(sign_up().ok, 'The address is still free')

    def test_failed_claim_rolls_back_account(self):
        """A failed claim leaves the profile unclaimed and no account."""
        with temporary_db():
            with util.transaction() as session:
                session.add(DBParticipant(participant_email='a@b.com'))
            with mock.patch.object(profiles, 'claim_profile',
                                   side_effect=Unavailable('nope')):
                outcome = sign_up()
            self.assertEqual(outcome.failure, Failure.STORE_UNAVAILABLE)
            self.assertEqual(count(DBAccount), 0)
            self.assertIsNotNone(profiles.get_unclaimed_profile('a@b.com'))

    def test_store_unavailable(self):
        """Database trouble is reported without details."""
        with temporary_db():
            error = OperationalError('SELECT', {}, Exception('gone away'))
            with mock.patch.object(accounts, 'does_email_exist',
                                   side_effect=error):
                outcome = sign_up()
            self.assertEqual(outcome.failure, Failure.STORE_UNAVAILABLE)
            self.assertNotIn('gone away', outcome.failure.message)


class TestLogIn(TestCase):
    """Tests for :func:`.identity.log_in`."""

    def setUp(self):
        self.ctx = temporary_db()
        self.ctx.__enter__()
        self.signed_up = sign_up().identity

    def tearDown(self):
        self.ctx.__exit__(None, None, None)

    def test_good_credentials(self):
        """The identity matches the one produced at signup."""
        outcome = identity.log_in(' A@b.Com', PASSWORD)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.identity, self.signed_up)

    def test_case_does_not_matter(self):
        """Differently cased addresses log in to the same account."""
        self.assertEqual(identity.log_in('A@B.com', PASSWORD),
                         identity.log_in('a@b.com', PASSWORD))
        self.assertEqual(identity.log_in('A@B.com', 'nope'),
                         identity.log_in('a@b.com', 'nope'))

    def test_missing_fields(self):
        """Both fields are required."""
        self.assertEqual(identity.log_in('', PASSWORD).failure,
                         Failure.VALIDATION)
        self.assertEqual(identity.log_in('a@b.com', '').failure,
                         Failure.VALIDATION)

    def test_rejections_look_the_same(self):
        """Unknown address and wrong password are indistinguishable."""
        unknown = identity.log_in('nobody@b.com', PASSWORD)
        wrong = identity.log_in('a@b.com', 'incorrect horse')
        self.assertEqual(unknown, wrong)
        self.assertEqual(unknown.failure, Failure.INVALID_CREDENTIALS)

    def test_inactive_account(self):
        """Deactivated accounts cannot log in, even with the password."""
        with util.transaction() as session:
            session.query(DBAccount) \
                .filter(DBAccount.email == 'a@b.com') \
                .update({'is_active': False})
        outcome = identity.log_in('a@b.com', PASSWORD)
        self.assertEqual(outcome.failure, Failure.ACCOUNT_INACTIVE)

    def test_profile_found_by_email(self):
        """An account with no linked profile gets one by e-mail."""
        with util.transaction() as session:
            account = accounts.create_account(
                'old@b.com', passwords.hash_password(PASSWORD, 4)
            )
            session.add(DBParticipant(participant_email='old@b.com',
                                      participant_first_name='Olga'))
        outcome = identity.log_in('old@b.com', PASSWORD)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.identity.account_id, account.account_id)
        self.assertEqual(outcome.identity.first_name, 'Olga')

    def test_no_profile_at_all(self):
        """An account without any profile can still log in."""
        with util.transaction():
            accounts.create_account(
                'bare@b.com', passwords.hash_password(PASSWORD, 4)
            )
        outcome = identity.log_in('bare@b.com', PASSWORD)
        self.assertTrue(outcome.ok)
        self.assertIsNone(outcome.identity.profile_id)
        self.assertEqual(outcome.identity.display_name, 'bare@b.com')

    def test_store_unavailable(self):
        """Database trouble during login is reported generically."""
        with mock.patch.object(accounts, 'get_account_by_email',
                               side_effect=Unavailable('nope')):
            outcome = identity.log_in('a@b.com', PASSWORD)
        self.assertEqual(outcome.failure, Failure.STORE_UNAVAILABLE)


class TestLogOut(TestCase):
    """Tests for :func:`.identity.log_out`."""

    def test_log_out(self):
        """The session is emptied."""
        with temporary_db():
            session = {'user': sign_up().identity.to_session(), 'other': 1}
            identity.log_out(session)
            self.assertEqual(session, {})


class TestRegisterAdmin(TestCase):
    """Tests for :func:`.identity.register_admin`."""

    def test_new_admin(self):
        """Creates an admin account with a linked profile."""
        with temporary_db():
            admin = identity.register_admin('Boss@B.com', PASSWORD,
                                            'Ella', 'Rises')
            self.assertEqual(admin.role, domain.ADMIN)
            self.assertEqual(admin.email, 'boss@b.com')
            self.assertIsNotNone(admin.profile_id)
            outcome = identity.log_in('boss@b.com', PASSWORD)
            self.assertTrue(outcome.identity.is_admin)

    def test_promote_existing(self):
        """An existing participant account is promoted in place."""
        with temporary_db():
            user = sign_up().identity
            admin = identity.register_admin('a@b.com', 'ignored',
                                            'Amy', 'Lee')
            self.assertEqual(admin.account_id, user.account_id)
            self.assertEqual(admin.profile_id, user.profile_id)
            self.assertEqual(admin.role, domain.ADMIN)
            self.assertEqual(count(DBAccount), 1)
            self.assertTrue(identity.log_in('a@b.com', PASSWORD).ok)

    def test_missing_fields(self):
        """Command-line callers get an exception, not an outcome."""
        with temporary_db():
            with self.assertRaises(ValueError):
                identity.register_admin('', PASSWORD, 'Ella', 'Rises')
