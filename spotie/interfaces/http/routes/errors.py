"""Translate application errors into error pages (or JSON under /api)."""

import logging

from flask import Blueprint, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from spotie.exceptions import (
    CatalogError,
    DocumentConflict,
    DocumentNotFound,
    DocumentStoreError,
    InvitationError,
    MissingParameterError,
    PlaylistAccessDenied,
)

logger = logging.getLogger(__name__)

errors_bp = Blueprint('errors', __name__)

_TITLES = {
    400: "Bad request",
    403: "Forbidden",
    404: "Not found",
    409: "Conflict",
    500: "Error",
    502: "Catalog unavailable",
    503: "Service unavailable",
}


def _respond(status: int, message: str):
    if request.path.startswith('/api/'):
        return jsonify({"error": message}), status
    template = 'error/404.html' if status == 404 else 'error/error.html'
    return render_template(template, title=_TITLES.get(status, "Error"), status=status, message=message), status


@errors_bp.app_errorhandler(MissingParameterError)
def _missing_parameter(exc):
    return _respond(400, str(exc))


@errors_bp.app_errorhandler(InvitationError)
def _invitation_error(exc):
    return _respond(400, str(exc))


@errors_bp.app_errorhandler(PlaylistAccessDenied)
def _access_denied(exc):
    logger.warning("Access denied: %s", exc)
    return _respond(403, "You do not have access to this playlist.")


@errors_bp.app_errorhandler(CatalogError)
def _catalog_error(exc):
    # The provider answers 400 for malformed ids and 404 for unknown ones
    if exc.status in (400, 404):
        return _respond(404, "The requested catalog item does not exist.")
    logger.error("Catalog failure: %s", exc)
    return _respond(502, "The music catalog is unavailable right now.")


@errors_bp.app_errorhandler(DocumentNotFound)
def _document_not_found(exc):
    return _respond(404, "The requested item does not exist.")


@errors_bp.app_errorhandler(DocumentConflict)
def _document_conflict(exc):
    return _respond(409, "Somebody else changed this item first. Reload and try again.")


@errors_bp.app_errorhandler(DocumentStoreError)
def _document_store_error(exc):
    logger.error("Document store failure: %s", exc)
    return _respond(503, "Playlists are unavailable right now.")


@errors_bp.app_errorhandler(HTTPException)
def _http_error(exc):
    return _respond(exc.code or 500, exc.description or exc.name)


@errors_bp.app_errorhandler(Exception)
def _unhandled(exc):
    logger.exception("Unhandled error: %s", exc)
    return _respond(500, "Something went wrong.")
