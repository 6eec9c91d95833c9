#!/usr/bin/env python
"""
Minimal CouchDB HTTP client used by the sharing repositories.

Each call is a single request; failures are raised as
:class:`~spotie.exceptions.DocumentStoreError` subclasses and are never
retried. Revision checks are left to CouchDB itself.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from spotie.exceptions import DocumentConflict, DocumentNotFound, DocumentStoreError
from spotie.observability.metrics import record_document_store_error

logger = logging.getLogger(__name__)


class CouchDBClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, db: str, *parts: str) -> str:
        segments = [quote(db, safe="")] + [quote(part, safe="") for part in parts]
        return "/".join([self.base_url] + segments)

    def _request(self, method: str, url: str, **kwargs) -> Any:
        kwargs.setdefault("timeout", self.timeout)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            record_document_store_error(None)
            logger.error("CouchDB %s %s failed: %s", method, url, exc)
            raise DocumentStoreError(f"Document store unreachable: {exc}") from exc

        if response.status_code >= 400:
            record_document_store_error(response.status_code)
            raise self._error_for(response)
        return response.json()

    @staticmethod
    def _error_for(response: requests.Response) -> DocumentStoreError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        reason = body.get("reason") or body.get("error") or response.reason or "unknown error"
        status = response.status_code
        if status == 404:
            return DocumentNotFound(f"Document not found: {reason}", status=status)
        if status == 409:
            return DocumentConflict(f"Document update conflict: {reason}", status=status)
        return DocumentStoreError(f"Document store error {status}: {reason}", status=status)

    def create(self, db: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new document; the reply carries ``ok``, ``id`` and ``rev``."""
        return self._request("POST", self._url(db) + "/", json=doc)

    def get(self, db: str, doc_id: str) -> Dict[str, Any]:
        return self._request("GET", self._url(db, doc_id))

    def find(self, db: str, selector: Dict[str, Any], limit: int) -> List[Dict[str, Any]]:
        """Run a Mango query and return the matching documents."""
        body = self._request("POST", self._url(db, "_find"), json={"selector": selector, "limit": limit})
        return body.get("docs", [])

    def put(self, db: str, doc_id: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", self._url(db, doc_id), json=doc)

    def delete(self, db: str, doc_id: str, rev: str) -> Dict[str, Any]:
        return self._request("DELETE", self._url(db, doc_id), params={"rev": rev})

    def ensure_database(self, db: str) -> bool:
        """Create ``db`` if needed; returns True when it was created."""
        try:
            self._request("PUT", self._url(db))
        except DocumentStoreError as exc:
            # 412 Precondition Failed: database already exists
            if exc.status == 412:
                return False
            raise
        logger.info("Created CouchDB database %s", db)
        return True

    def ping(self) -> bool:
        try:
            self._request("GET", self.base_url + "/_up")
        except DocumentStoreError:
            return False
        return True


__all__ = ["CouchDBClient"]
