"""Controllers for the public pages."""

from typing import Any, Dict, Optional, Tuple
from datetime import datetime
from http import HTTPStatus as status
import logging

from flask import current_app, url_for
from pytz import timezone

from ..services import events
from ..services.exceptions import Unavailable

logger = logging.getLogger(__name__)

ResponseData = Tuple[Dict[str, Any], int, Dict[str, str]]

HOME_EVENT_COUNT = 6
RELATED_EVENT_COUNT = 3
EVENTS_UNAVAILABLE = 'Unable to load events. Please try again.'
EVENT_NOT_FOUND = 'Event not found.'


def local_now() -> datetime:
    """Current wall-clock time in the display timezone, without tzinfo."""
    zone = timezone(current_app.config.get('DISPLAY_TIMEZONE', 'UTC'))
    return datetime.now(zone).replace(tzinfo=None)


def home() -> ResponseData:
    """The landing page, with a few upcoming events."""
    try:
        upcoming = events.upcoming_events(local_now(), limit=HOME_EVENT_COUNT)
    except Unavailable:
        logger.exception('Error loading home events')
        upcoming = []
    return {'events': upcoming}, status.OK, {}


def list_events(event_type: Optional[str] = None) -> ResponseData:
    """Upcoming events, optionally of a single type."""
    try:
        upcoming = events.upcoming_events(local_now(), event_type=event_type)
        types = events.event_types()
    except Unavailable:
        logger.exception('Error loading events')
        data = {'flash': ('error', EVENTS_UNAVAILABLE)}
        return data, status.SEE_OTHER, {'Location': url_for('ui.home')}
    data = {
        'events': upcoming,
        'event_types': types,
        'selected_type': event_type or ''
    }
    return data, status.OK, {}


def event_detail(event_id: int) -> ResponseData:
    """A single event and a few related ones."""
    try:
        event = events.get_event(event_id)
        if event is None:
            data = {'flash': ('error', EVENT_NOT_FOUND)}
            return data, status.SEE_OTHER, {'Location': url_for('ui.events')}
        now = local_now()
        related = events.upcoming_events(now, event_type=event.event_type,
                                         limit=RELATED_EVENT_COUNT,
                                         exclude=event.event_id)
    except Unavailable:
        logger.exception('Error loading event %s', event_id)
        data = {'flash': ('error', EVENTS_UNAVAILABLE)}
        return data, status.SEE_OTHER, {'Location': url_for('ui.events')}
    data = {
        'event': event,
        'related_events': related,
        'is_past': event.starts is not None and event.starts < now
    }
    return data, status.OK, {}
