"""
Local persistent store for favorite restaurants and their menus.

One PersistentStore is opened at startup and closed at shutdown. It owns the
SQLAlchemy engine and a single long-lived unit-of-work session; repositories
read and stage changes through it and the store decides when to commit.
"""

from typing import List, Optional
import logging

from sqlalchemy import create_engine, event, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.exceptions import StorageError
from domain.models import Base, Restaurant

logger = logging.getLogger("besteats.store")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class PersistentStore:
    """Transactional save/delete/fetch over the restaurant and menu tables"""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session: Optional[Session] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._session is not None

    def open(self) -> "PersistentStore":
        """
        Connect, create the schema and start the unit of work.

        Raises:
            StorageError: if the database cannot be opened
        """
        if self.is_open:
            return self

        kwargs = {"echo": self.echo, "future": True}
        is_sqlite = self.database_url.startswith("sqlite")
        if is_sqlite:
            kwargs["connect_args"] = {"check_same_thread": False}
            if self.database_url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool

        try:
            engine = create_engine(self.database_url, **kwargs)
            if is_sqlite:
                event.listen(engine, "connect", _enable_sqlite_foreign_keys)
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as exc:
            logger.exception("Could not open store %s", self.database_url)
            raise StorageError(
                f"Could not open store: {exc}", details={"url": self.database_url}
            ) from exc

        self._engine = engine
        self._session = sessionmaker(bind=engine, future=True, expire_on_commit=True)()
        logger.info("Store opened %s", self.database_url)
        return self

    def close(self) -> None:
        try:
            if self._session is not None:
                self._session.close()
            if self._engine is not None:
                self._engine.dispose()
                logger.info("Store closed %s", self.database_url)
        finally:
            self._session = None
            self._engine = None

    def __enter__(self) -> "PersistentStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StorageError("Store is not open")
        return self._session

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    def has_changes(self) -> bool:
        session = self.session
        return bool(session.new or session.dirty or session.deleted)

    def add(self, entity) -> None:
        """Stage a new entity; nothing is written until save()"""
        self.session.add(entity)

    def save(self) -> bool:
        """
        Commit pending changes.

        Returns:
            True if a commit happened, False if there was nothing to write

        Raises:
            StorageError: if the commit fails; the unit of work is rolled back
        """
        session = self.session
        if not self.has_changes():
            return False
        try:
            session.commit()
            return True
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Store save failed")
            raise StorageError(f"Could not save changes: {exc}") from exc

    def delete(self, entity) -> None:
        """
        Remove an entity and persist immediately. Owned menus go with a restaurant.

        Raises:
            StorageError: if the commit fails; the unit of work is rolled back
        """
        session = self.session
        try:
            session.delete(entity)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Store delete failed for %r", entity)
            raise StorageError(f"Could not delete {entity!r}: {exc}") from exc

    def refresh(self) -> None:
        """Forget cached attribute state so the next read goes to storage"""
        self.session.expire_all()

    def fetch_all(self) -> List[Restaurant]:
        """All restaurants in creation order"""
        try:
            stmt = select(Restaurant).order_by(Restaurant.created_at, Restaurant.restaurant_id)
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            logger.exception("Store fetch failed")
            raise StorageError(f"Could not read restaurants: {exc}") from exc

    def get(self, model, entity_id):
        try:
            return self.session.get(model, entity_id)
        except SQLAlchemyError as exc:
            logger.exception("Store lookup failed for %s %s", model.__name__, entity_id)
            raise StorageError(f"Could not read {model.__name__}: {exc}") from exc
