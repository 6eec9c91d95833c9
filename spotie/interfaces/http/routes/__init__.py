"""Route blueprints exposed via Flask."""

from .catalog import catalog_bp
from .api import api_bp
from .auth import auth_bp
from .playlists import playlists_bp
from .invites import invites_bp
from .health import health_bp
from .errors import errors_bp

__all__ = [
    "catalog_bp",
    "api_bp",
    "auth_bp",
    "playlists_bp",
    "invites_bp",
    "health_bp",
    "errors_bp",
]
