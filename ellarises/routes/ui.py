"""Provides Flask integration for the external user interface."""

from typing import Any, Callable, Dict
from functools import wraps
from http import HTTPStatus as status
import logging

from flask import Blueprint, Response, flash, make_response, redirect, \
    render_template, request, session, url_for

from .. import domain
from ..auth import sessions
from ..auth.decorators import scoped
from ..controllers import authentication, journey, public
from ..services import util

logger = logging.getLogger(__name__)
blueprint = Blueprint('ui', __name__, url_prefix='')

CONTENT_SECURITY_POLICY = '; '.join([
    "default-src 'self' https://cdn.jsdelivr.net",
    "script-src 'self' https://cdn.jsdelivr.net",
    "connect-src 'self' https://cdn.jsdelivr.net",
    "img-src 'self' data:",
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
    "frame-ancestors 'none'",
])


def anonymous_only(func: Callable) -> Callable:
    """Redirect logged-in users to their landing area."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        response = authentication.already_authenticated(session)
        if response is not None:
            _, code, headers = response
            return redirect(headers['Location'], code=code)
        return func(*args, **kwargs)
    return wrapper


def _redirect_with_flash(data: Dict[str, Any], code: int,
                         headers: Dict[str, str]) -> Response:
    """
    Flash the controller's message (if any) and redirect.

    Flask keeps flashed messages in the session, so we do that here instead
    of in the controller, after any identity has been bound.
    """
    message = data.pop('flash', None)
    if message is not None:
        category, text = message
        flash(text, category)
    return make_response(redirect(headers['Location'], code=code))


def _render(template: str, data: Dict[str, Any], code: int,
            headers: Dict[str, str], **context: Any) -> Response:
    if code == status.SEE_OTHER:
        return _redirect_with_flash(data, code, headers)
    content = render_template(template, **data, **context)
    return make_response(content, code, headers)


@blueprint.after_app_request
def apply_response_headers(response: Response) -> Response:
    """Apply response headers to all responses."""
    response.headers['Content-Security-Policy'] = CONTENT_SECURITY_POLICY
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Referrer-Policy'] = 'same-origin'
    return response


@blueprint.app_context_processor
def inject_identity() -> Dict[str, Any]:
    """Make the current identity (or ``None``) available to templates."""
    return {'current_user': sessions.current(session)}


# Public pages.

@blueprint.route('/', methods=['GET'])
def home() -> Response:
    """Landing page."""
    data, code, headers = public.home()
    return _render('public/home.html', data, code, headers,
                   page_title='Ella Rises', active_nav='home')


@blueprint.route('/about', methods=['GET'])
def about() -> Response:
    """About the organization."""
    return render_template('public/about.html', page_title='About',
                           active_nav='about')


@blueprint.route('/programs', methods=['GET'])
def programs() -> Response:
    """Program descriptions."""
    return render_template('public/programs.html', page_title='Programs',
                           active_nav='programs')


@blueprint.route('/get-involved', methods=['GET'])
def get_involved() -> Response:
    """Volunteering and partnership."""
    return render_template('public/get_involved.html',
                           page_title='Get Involved',
                           active_nav='get-involved')


@blueprint.route('/donate', methods=['GET'])
def donate() -> Response:
    """Donation page."""
    return render_template('public/donate.html', page_title='Donate',
                           active_nav='donate')


@blueprint.route('/impact', methods=['GET'])
def impact() -> Response:
    """Impact dashboard."""
    return render_template('public/impact.html', page_title='Impact',
                           active_nav='impact')


@blueprint.route('/events', methods=['GET'])
def events() -> Response:
    """Upcoming events, optionally filtered by ``?type=``."""
    event_type = request.args.get('type', '').strip() or None
    data, code, headers = public.list_events(event_type)
    return _render('public/events_list.html', data, code, headers,
                   page_title='Events', active_nav='events')


@blueprint.route('/events/<int:event_id>', methods=['GET'])
def event_detail(event_id: int) -> Response:
    """A single event."""
    data, code, headers = public.event_detail(event_id)
    title = data['event'].name if 'event' in data else 'Event Details'
    return _render('public/event_detail.html', data, code, headers,
                   page_title=title, active_nav='events')


# Authentication.

@blueprint.route('/login', methods=['GET', 'POST'])
@anonymous_only
def login() -> Response:
    """User can log in with e-mail and password."""
    data, code, headers = authentication.login(request.method, request.form,
                                               session)
    return _render('auth/login.html', data, code, headers,
                   page_title='Login', active_nav='login')


@blueprint.route('/signup', methods=['GET', 'POST'])
@anonymous_only
def signup() -> Response:
    """Interface for creating new accounts."""
    data, code, headers = authentication.signup(request.method, request.form,
                                                session)
    return _render('auth/register.html', data, code, headers,
                   page_title='Create Account', active_nav='signup')


@blueprint.route('/logout', methods=['POST'])
def logout() -> Response:
    """Log out, then go to the landing page."""
    data, code, headers = authentication.logout(session)
    return _redirect_with_flash(data, code, headers)


# Signed-in areas.

@blueprint.route('/my-journey', methods=['GET'])
@scoped()
def my_journey(identity: domain.SessionIdentity) -> Response:
    """Participant dashboard."""
    data, code, headers = journey.overview(identity)
    return _render('journey/overview.html', data, code, headers,
                   page_title='My Journey', active_nav='my-journey')


@blueprint.route('/manage', methods=['GET'])
@scoped(domain.ADMIN)
def manage(identity: domain.SessionIdentity) -> Response:
    """Send administrators on to the dashboard."""
    return redirect(url_for('ui.manage_dashboard'), code=status.SEE_OTHER)


@blueprint.route('/manage/dashboard', methods=['GET'])
@scoped(domain.ADMIN)
def manage_dashboard(identity: domain.SessionIdentity) -> Response:
    """Administrative landing page."""
    data, code, headers = journey.manage_dashboard(identity)
    return _render('manage/dashboard.html', data, code, headers,
                   page_title='Admin Dashboard', active_nav='manage')


@blueprint.route('/status', methods=['GET'])
def service_status() -> Response:
    """Report whether the app can talk to its database."""
    if util.is_available():
        return make_response('OK', status.OK)
    return make_response('Database unavailable', status.SERVICE_UNAVAILABLE)
