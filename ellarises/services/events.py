"""Read-only access to scheduled events for the public pages."""

from typing import List, Optional
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from .. import domain
from .exceptions import Unavailable
from .models import DBEventDetails, DBEventTemplate, db


def _to_domain(db_event: DBEventDetails) -> domain.Event:
    template: Optional[DBEventTemplate] = db_event.template
    return domain.Event(
        event_id=db_event.event_details_id,
        name=db_event.event_name,
        starts=db_event.event_date_time_start,
        ends=db_event.event_date_time_end,
        location=db_event.event_location,
        capacity=db_event.event_capacity,
        event_type=(template.event_type if template else None) or 'Event',
        description=(template.event_description if template else None) or '',
        recurrence_pattern=template.event_recurrence_pattern
        if template else None
    )


def upcoming_events(now: datetime, event_type: Optional[str] = None,
                    limit: Optional[int] = None,
                    exclude: Optional[int] = None) -> List[domain.Event]:
    """
    Get events starting at or after ``now``, soonest first.

    Parameters
    ----------
    now : datetime
    event_type : str or None
        If given, only events whose template has this type.
    limit : int or None
    exclude : int or None
        An event id to leave out (used for "related events").

    Returns
    -------
    list
        Possibly empty list of :class:`.domain.Event`.

    """
    try:
        query = db.session.query(DBEventDetails) \
            .outerjoin(DBEventTemplate) \
            .filter(DBEventDetails.event_date_time_start >= now)
        if event_type:
            query = query.filter(DBEventTemplate.event_type == event_type)
        if exclude is not None:
            query = query.filter(DBEventDetails.event_details_id != exclude)
        query = query.order_by(DBEventDetails.event_date_time_start.asc())
        if limit is not None:
            query = query.limit(limit)
        return [_to_domain(db_event) for db_event in query.all()]
    except SQLAlchemyError as e:
        raise Unavailable('Could not load events') from e


def get_event(event_id: int) -> Optional[domain.Event]:
    """Get a single event, or ``None`` if there is no such event."""
    try:
        db_event = db.session.get(DBEventDetails, event_id)
    except SQLAlchemyError as e:
        raise Unavailable('Could not load event') from e
    return _to_domain(db_event) if db_event is not None else None


def event_types() -> List[str]:
    """Get the distinct, non-null event types, alphabetically."""
    try:
        rows = db.session.query(DBEventTemplate.event_type) \
            .filter(DBEventTemplate.event_type.isnot(None)) \
            .distinct() \
            .order_by(DBEventTemplate.event_type) \
            .all()
    except SQLAlchemyError as e:
        raise Unavailable('Could not load event types') from e
    return [row[0] for row in rows]
