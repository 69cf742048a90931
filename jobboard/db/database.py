# jobboard/db/database.py
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from jobboard.config import DB_URL
from jobboard.db.models import Base

log = logging.getLogger(__name__)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE rules unless this is set per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(DB_URL, echo=False) # Set echo=True for debugging SQL if needed
Session = sessionmaker(bind=engine, expire_on_commit=False)


def prepare_database(bind=None):
    # Create tables if they don't exist. If they exist, this does nothing.
    Base.metadata.create_all(bind or engine)
    log.info("Database tables ensured.")
