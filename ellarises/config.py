"""Flask configuration."""
import secrets
import os

#################### General config for app ####################
APP_ENV = os.environ.get('APP_ENV', 'development')
"""Either ``development`` or ``production``."""

SECRET_KEY = os.environ.get('SECRET_KEY', secrets.token_urlsafe(16))
"""Sets the `Flask` secret key used to sign the session cookie."""

SITE_NAME = os.environ.get('SITE_NAME', 'Ella Rises')

DISPLAY_TIMEZONE = os.environ.get('DISPLAY_TIMEZONE', 'US/Mountain')
"""Timezone in which event dates are shown to visitors."""


#################### Database ####################
def _database_uri() -> str:
    uri = os.environ.get('DATABASE_URI')
    if uri:
        return uri
    if APP_ENV == 'production':
        host = os.environ.get('RDS_HOSTNAME', 'localhost')
        user = os.environ.get('RDS_USERNAME', 'postgres')
        password = os.environ.get('RDS_PASSWORD', '')
        database = os.environ.get('RDS_DB_NAME', 'ellarises')
        port = os.environ.get('RDS_PORT', '5432')
    else:
        host = os.environ.get('PGHOST', 'localhost')
        user = os.environ.get('PGUSER', 'postgres')
        password = os.environ.get('PGPASSWORD', '')
        database = os.environ.get('PGDATABASE', 'ellarises')
        port = os.environ.get('PGPORT', '5432')
    return f'postgresql://{user}:{password}@{host}:{port}/{database}'


SQLALCHEMY_DATABASE_URI = _database_uri()
"""If ``DATABASE_URI`` is not set, built from the PG* (or RDS_*) variables."""

SQLALCHEMY_TRACK_MODIFICATIONS = False

CREATE_DB = bool(int(os.environ.get('CREATE_DB', 0)))


#################### Authentication ####################
BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', '12'))
"""bcrypt cost factor. 12 takes a few hundred ms; 10 is roughly 60ms."""

SESSION_IDENTITY_KEY = 'user'
"""Session key under which the authenticated identity is stored."""

SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = 'Lax'
SESSION_COOKIE_SECURE = bool(int(os.environ.get(
    'SESSION_COOKIE_SECURE',
    '1' if APP_ENV == 'production' else '0'
)))

LOGIN_PAGE = 'ui.login'
SIGNUP_PAGE = 'ui.signup'
PUBLIC_LANDING = 'ui.home'
"""Endpoints used when redirecting after auth failures and logout."""


#################### Logging ####################
LOGLEVEL = int(os.environ.get('LOGLEVEL', 20))
LOG_JSON = bool(int(os.environ.get('LOG_JSON', '1')))
"""Emit structured JSON log lines. Set to 0 for plain text in development."""
