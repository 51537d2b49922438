"""Database models."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, \
    String, Text, func, text, true
from sqlalchemy.orm import relationship
from flask_sqlalchemy import SQLAlchemy

db: SQLAlchemy = SQLAlchemy()


class DBAccount(db.Model):  # type: ignore
    """
    Login credentials.

    +---------------+--------------+------+-----+---------+----------------+
    | Field         | Type         | Null | Key | Default | Extra          |
    +---------------+--------------+------+-----+---------+----------------+
    | user_id       | integer      | NO   | PRI | NULL    | auto_increment |
    | email         | varchar(255) | NO   | UNI | NULL    |                |
    | password_hash | varchar(255) | NO   |     | NULL    |                |
    | role          | varchar(20)  | NO   |     | 'user'  |                |
    | is_active     | boolean      | NO   |     | true    |                |
    | created_at    | timestamp    | NO   |     | now()   |                |
    +---------------+--------------+------+-----+---------+----------------+
    """

    __tablename__ = 'user_account'

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    """Always stored trimmed and lowercased."""
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, server_default=text("'user'"))
    is_active = Column(Boolean, nullable=False, server_default=true())
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    profile = relationship('DBParticipant', back_populates='account',
                           uselist=False)


class DBParticipant(db.Model):  # type: ignore
    """
    Participant profile.

    Rows may be created by event registration before the person has an
    account, in which case ``user_id`` is NULL.
    """

    __tablename__ = 'participant_info'

    participant_id = Column(Integer, primary_key=True, autoincrement=True)
    participant_email = Column(String(255), nullable=False, index=True)
    participant_first_name = Column(String(100))
    participant_last_name = Column(String(100))
    user_id = Column(ForeignKey('user_account.user_id'), nullable=True,
                     unique=True)

    account = relationship('DBAccount', back_populates='profile')


class DBEventTemplate(db.Model):  # type: ignore
    """Shared description of a kind of event (workshop, summit, ...)."""

    __tablename__ = 'event_templates'

    event_template_id = Column(Integer, primary_key=True, autoincrement=True)
    event_type = Column(String(100))
    event_description = Column(Text)
    event_recurrence_pattern = Column(String(100))


class DBEventDetails(db.Model):  # type: ignore
    """A scheduled event."""

    __tablename__ = 'event_details'

    event_details_id = Column(Integer, primary_key=True, autoincrement=True)
    event_name = Column(String(255), nullable=False)
    event_template_id = Column(
        ForeignKey('event_templates.event_template_id'),
        nullable=True, index=True
    )
    event_date_time_start = Column(DateTime, index=True)
    event_date_time_end = Column(DateTime)
    event_location = Column(String(255))
    event_capacity = Column(Integer)

    template = relationship('DBEventTemplate')
