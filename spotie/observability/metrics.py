from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

CATALOG_CALLS = Counter(
    "spotie_catalog_calls_total",
    "Calls issued to the catalog provider, by operation and outcome.",
    ["operation", "outcome"],
)
INVITATIONS_SENT = Counter(
    "spotie_invitations_sent_total",
    "Total number of playlist invitations created.",
)
DOCUMENT_STORE_ERRORS = Counter(
    "spotie_document_store_errors_total",
    "Failed document-store requests, by HTTP status (or 'transport').",
    ["status"],
)


def record_catalog_call(operation: str, outcome: str) -> None:
    CATALOG_CALLS.labels(operation=operation, outcome=outcome).inc()


def record_invitation_sent() -> None:
    INVITATIONS_SENT.inc()


def record_document_store_error(status) -> None:
    DOCUMENT_STORE_ERRORS.labels(status=str(status) if status is not None else "transport").inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
