"""Application factory for the Ella Rises site."""

from typing import Any, Mapping, Optional

from flask import Flask, Response, render_template
from werkzeug.exceptions import Forbidden, NotFound

from . import app_logging, commands, filters
from .routes import ui
from .services import util


def create_web_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Initialize and configure the Ella Rises application.

    Parameters
    ----------
    config : Mapping
        Values that override ``config.py``. Applied before any extension is
        initialized, so this is where tests point the app at a database.

    """
    app = Flask('ellarises')
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    app_logging.setup_logger(app.config['LOGLEVEL'], app.config['LOG_JSON'])

    util.init_app(app)
    app.register_blueprint(ui.blueprint)
    commands.init_app(app)

    app.jinja_env.filters['format_date'] = filters.format_date
    app.jinja_env.filters['format_time'] = filters.format_time
    app.jinja_env.filters['month_abbr'] = filters.month_abbr
    app.jinja_env.filters['day_of_month'] = filters.day_of_month
    app.jinja_env.filters['truncate_text'] = filters.truncate_text

    register_error_handlers(app)

    if app.config['CREATE_DB']:
        with app.app_context():
            util.create_all()

    return app


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(NotFound)(render_not_found)
    app.errorhandler(Forbidden)(render_forbidden)


def render_not_found(error: NotFound) -> Response:
    """Render the 404 page."""
    content = render_template('errors/404.html', page_title='Page Not Found')
    return Response(content, status=error.code)


def render_forbidden(error: Forbidden) -> Response:
    """Render the 403 page."""
    content = render_template('errors/403.html', page_title='Access Denied')
    return Response(content, status=error.code)
