"""Jinja2 template filters."""

from typing import Optional
from datetime import datetime

from flask import current_app
from pytz import timezone

ELLIPSIS = '…'


def _localize(value: datetime) -> datetime:
    # Naive values come from timestamp columns already in local time.
    if value.tzinfo is None:
        return value
    zone = timezone(current_app.config.get('DISPLAY_TIMEZONE', 'UTC'))
    return value.astimezone(zone)


def format_date(value: Optional[datetime]) -> str:
    """Render a date like ``Mar 5, 2025``; blank for ``None``."""
    if value is None:
        return ''
    local = _localize(value)
    return f'{local.strftime("%b")} {local.day}, {local.year}'


def format_time(value: Optional[datetime]) -> str:
    """Render a time like ``06:30 PM``; blank for ``None``."""
    if value is None:
        return ''
    return _localize(value).strftime('%I:%M %p')


def month_abbr(value: Optional[datetime]) -> str:
    """Three-letter month, for the calendar badges on event cards."""
    return _localize(value).strftime('%b') if value else ''


def day_of_month(value: Optional[datetime]) -> str:
    """Zero-padded day of the month."""
    return _localize(value).strftime('%d') if value else ''


def truncate_text(value: Optional[str], length: int = 120) -> str:
    """Cut ``value`` to ``length`` characters, adding an ellipsis if cut."""
    if not value:
        return ''
    if len(value) <= length:
        return value
    return value[:length] + ELLIPSIS
