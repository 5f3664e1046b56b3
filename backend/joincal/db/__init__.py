from joincal.db.base import Base
from joincal.db.session import get_db, engine, SessionLocal
from joincal.db.tables import ALL_TABLE_NAMES

__all__ = ["get_db", "engine", "SessionLocal", "Base", "ALL_TABLE_NAMES"]
