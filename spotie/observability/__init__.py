# noqa: D104 - package initialization
from .logging import configure_file_logging, configure_structured_logging  # noqa: F401
from .metrics import (  # noqa: F401
    metrics_blueprint,
    record_catalog_call,
    record_document_store_error,
    record_invitation_sent,
)
