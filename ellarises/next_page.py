"""Where to send someone once they are authenticated."""

from . import domain

ADMIN_LANDING = 'ui.manage_dashboard'
PARTICIPANT_LANDING = 'ui.my_journey'


def landing_endpoint(identity: domain.SessionIdentity) -> str:
    """
    Pick the landing area for an identity, by role alone.

    Used after signup, after login, and when an authenticated caller asks for
    the login or signup form.
    """
    if identity.role == domain.ADMIN:
        return ADMIN_LANDING
    return PARTICIPANT_LANDING
