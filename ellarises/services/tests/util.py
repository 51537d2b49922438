"""Testing helpers."""
from typing import Any, Dict, Generator, Optional
from contextlib import contextmanager

from flask import Flask

from ...factory import create_web_app
from .. import util

TEST_CONFIG = {
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'SECRET_KEY': 'not-a-secret',
    'BCRYPT_ROUNDS': 4,
    'CREATE_DB': False,
    'LOG_JSON': False,
    'SESSION_COOKIE_SECURE': False,
    'DISPLAY_TIMEZONE': 'US/Mountain',
    'TESTING': True
}


def make_app(**overrides: Any) -> Flask:
    """Build an app pointed at an in-memory sqlite database."""
    config: Dict[str, Any] = dict(TEST_CONFIG)
    config.update(overrides)
    return create_web_app(config)


@contextmanager
def temporary_db(app: Optional[Flask] = None, create: bool = True,
                 drop: bool = True) -> Generator[Flask, None, None]:
    """Provide an in-memory sqlite database for testing purposes."""
    if app is None:
        app = make_app()
    with app.app_context():
        if create:
            util.create_all()
        try:
            yield app
        finally:
            if drop:
                util.drop_all()
