"""Catalog domain (provider mapping and data access)."""

from . import mapper
from .catalog_service import CatalogService, build_catalog_service

__all__ = ["mapper", "CatalogService", "build_catalog_service"]
