"""
Declarative base shared by the ORM models.

Engines and sessions are owned by adapters.store.PersistentStore; nothing here
connects to a database at import time.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

# Create SQLAlchemy Base
Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware creation timestamp used as a column default"""
    return datetime.now(timezone.utc)
