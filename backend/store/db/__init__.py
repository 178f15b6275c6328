import importlib
import os

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from store.config import settings
from store.utils.logs import get_logger

log = get_logger("store.db")

DATABASE_URL = settings.DATABASE_URL
_is_sqlite = DATABASE_URL.startswith("sqlite")
# SQLite binds Numeric as REAL, which keeps 15 significant digits exactly
DECIMAL_MAX_DIGITS = 15 if _is_sqlite else 21
# largest value a 64-bit INTEGER primary key holds
MAX_ID = 2**63 - 1

engine = create_engine(
    DATABASE_URL,
    future=True,
    echo=settings.SQL_ECHO,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

if _is_sqlite:

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores REFERENCES clauses unless asked per connection.
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Model modules that must be imported so Base.metadata knows every table.
MODEL_MODULES = [
    "store.models.product_order",
    "store.models.invoice",
    "store.models.shipment",
]


def init_db(reset=None):
    """
    Initialize DB schema.

    Behavior:
      - If `reset` is true, or it is None and RESET_DB is 1/true/yes,
        drop & recreate tables.
      - Otherwise create missing tables and leave existing ones in place.
    """
    if reset is None:
        reset = os.environ.get("RESET_DB", "false").lower() in ("1", "true", "yes")

    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        log.info("Resetting database schema at %s", engine.url)
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized (%d tables)", len(Base.metadata.tables))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
