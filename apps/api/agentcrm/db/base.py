from sqlalchemy.orm import DeclarativeBase

# Ids are never reused after deletion (SQLite otherwise recycles max(rowid))
AUTOINCREMENT = {"sqlite_autoincrement": True}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
