import os
import logging
from uuid import uuid4

from flask import Flask, request, g
from flask_cors import CORS

from config import Config
from spotie.auth import init_auth
from spotie.database import CouchDBClient, initialize_database
from spotie.domain.catalog import build_catalog_service
from spotie.domain.sharing import InviteRepository, PlaylistRepository, SharingService
from spotie.interfaces.http.routes import (
    catalog_bp,
    api_bp,
    auth_bp,
    playlists_bp,
    invites_bp,
    health_bp,
    errors_bp,
)
from spotie.observability import configure_file_logging, configure_structured_logging, metrics_blueprint
from spotie.settings import load_app_settings


logger = logging.getLogger(__name__)

BLUEPRINTS = (
    catalog_bp,
    api_bp,
    auth_bp,
    playlists_bp,
    invites_bp,
    health_bp,
    metrics_blueprint,
    errors_bp,
)


def _install_http_hooks(app):
    """Request ids, CORS for the JSON API and the CSP header."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _decorate_response(response):
        request_id = getattr(g, 'request_id', None)
        if request_id:
            response.headers.setdefault('X-Request-ID', request_id)
        csp_policy = app.config.get('CONTENT_SECURITY_POLICY')
        if csp_policy:
            response.headers.setdefault('Content-Security-Policy', csp_policy)
        return response

    # Wildcard origins are ignored
    origins = sorted({
        origin.strip()
        for origin in app.config.get('CORS_ALLOWED_ORIGINS', ())
        if origin and origin.strip() not in ('', '*')
    })
    CORS(app, resources={r"/api/*": {"origins": origins}})


def _wire_services(app):
    """Build the catalog and sharing services and park them on ``app.extensions``."""
    settings = load_app_settings()
    app.extensions['settings'] = settings
    app.extensions['catalog_service'] = build_catalog_service(settings)

    couchdb = CouchDBClient(settings.couchdb_url, timeout=settings.couchdb_timeout)
    app.extensions['couchdb'] = couchdb
    app.extensions['sharing_service'] = SharingService(
        invites=InviteRepository(couchdb, settings.invites_db),
        playlists=PlaylistRepository(couchdb, settings.playlists_db),
    )
    app.logger.info(
        "Document store at %s (invites=%s, playlists=%s)",
        settings.couchdb_url, settings.invites_db, settings.playlists_db,
    )


def create_app(config_overrides=None):
    app = Flask(__name__, template_folder='templates', static_folder='public', static_url_path='')
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_structured_logging(app)
    _install_http_hooks(app)

    # Accounts live in SQLite, sessions in the signed cookie
    initialize_database(app)
    init_auth(app)

    _wire_services(app)
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    return app


if __name__ == '__main__':
    # With the reloader on, only the serving child writes a log file
    if not Config.DEBUG or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'storage', 'log')
        log_file_path = configure_file_logging(log_dir, console=Config.ENABLE_CONSOLE_LOGS)
        logger.info("File logging initialized at %s", log_file_path)

    if not Config.SPOTIPY_CLIENT_ID or not Config.SPOTIPY_CLIENT_SECRET:
        logger.warning("SPOTIPY_CLIENT_ID / SPOTIPY_CLIENT_SECRET are not set; catalog pages will fail.")

    app = create_app()
    app.logger.handlers = []
    app.logger.propagate = True
    logger.info("Starting Spotie on port 3000")
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=3000, threaded=True)
