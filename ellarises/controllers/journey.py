"""Controllers for the participant dashboard and the admin landing page."""

from typing import Any, Dict, Tuple
from http import HTTPStatus as status

from .. import domain

ResponseData = Tuple[Dict[str, Any], int, Dict[str, str]]


def overview(identity: domain.SessionIdentity) -> ResponseData:
    """My Journey landing page."""
    data = {
        'identity': identity,
        'has_profile': identity.profile_id is not None
    }
    return data, status.OK, {}


def manage_dashboard(identity: domain.SessionIdentity) -> ResponseData:
    """Administrative landing page."""
    return {'identity': identity}, status.OK, {}
