# manage.py
import sys

from app import create_app
from spotie.database import db
from spotie.exceptions import DocumentStoreError


def create_db():
    """Creates the account tables and the CouchDB databases."""
    app = create_app()
    with app.app_context():
        db.create_all()
        print(f"Account tables ready at {app.config['SQLALCHEMY_DATABASE_URI']}")

    settings = app.extensions['settings']
    couchdb = app.extensions['couchdb']
    for name in (settings.invites_db, settings.playlists_db):
        try:
            created = couchdb.ensure_database(name)
        except DocumentStoreError as exc:
            print(f"Could not create CouchDB database '{name}': {exc}")
            sys.exit(1)
        print(f"CouchDB database '{name}' {'created' if created else 'already exists'}")


if __name__ == '__main__':
    if len(sys.argv) > 1:
        command = sys.argv[1]
        if command == 'create_db':
            create_db()
        else:
            print(f"Unknown command: {command}")
            print("Usage: python manage.py create_db")
    else:
        print("No command provided. Usage: python manage.py create_db")
