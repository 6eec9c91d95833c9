"""Persistence: SQLAlchemy accounts and the CouchDB document store."""

from .couchdb import CouchDBClient
from .db_manager import User, db, initialize_database

__all__ = ["CouchDBClient", "User", "db", "initialize_database"]
