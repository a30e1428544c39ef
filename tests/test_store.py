"""
Tests for the PersistentStore adapter.

Covers the unit-of-work contract the favorites repository relies on:
- save() is a no-op without pending changes
- delete() persists immediately and cascades to menus
- fetch_all() returns restaurants in creation order
- failures surface as StorageError and roll the session back
- opening an unreachable database is a StorageError
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from test_fixtures import store
from adapters.store import PersistentStore
from app.exceptions import StorageError
from domain.models import Menu, Restaurant


def _count(store, model) -> int:
    return store.session.scalar(select(func.count()).select_from(model))


def test_save_without_changes_is_noop(store: PersistentStore):
    assert store.has_changes() is False
    assert store.save() is False


def test_add_then_save_persists(store: PersistentStore):
    store.add(Restaurant(name="을지면옥"))
    assert store.has_changes() is True

    assert store.save() is True
    assert store.has_changes() is False
    assert [r.name for r in store.fetch_all()] == ["을지면옥"]


def test_fetch_all_preserves_creation_order(store: PersistentStore):
    for name in ["하동관", "을지면옥", "우래옥"]:
        store.add(Restaurant(name=name))
        store.save()

    assert [r.name for r in store.fetch_all()] == ["하동관", "을지면옥", "우래옥"]


def test_delete_cascades_to_menus(store: PersistentStore):
    restaurant = Restaurant(name="하동관")
    restaurant.menus.append(Menu(name="곰탕", price=Decimal("15000")))
    restaurant.menus.append(Menu(name="수육", price=Decimal("40000")))
    store.add(restaurant)
    store.save()
    assert _count(store, Menu) == 2

    store.delete(restaurant)

    assert store.fetch_all() == []
    assert _count(store, Menu) == 0


def test_failed_save_raises_storage_error_and_rolls_back(store: PersistentStore):
    store.add(Restaurant(name="   "))  # violates the non-empty name check

    with pytest.raises(StorageError):
        store.save()

    assert store.has_changes() is False
    assert store.fetch_all() == []


def test_negative_menu_price_rejected_by_storage(store: PersistentStore):
    restaurant = Restaurant(name="우래옥")
    restaurant.menus.append(Menu(name="물냉면", price=Decimal("-1")))
    store.add(restaurant)

    with pytest.raises(StorageError):
        store.save()
    assert store.fetch_all() == []


def test_session_requires_open_store():
    closed = PersistentStore("sqlite://")
    assert closed.is_open is False
    with pytest.raises(StorageError):
        closed.fetch_all()


def test_open_failure_is_storage_error(tmp_path):
    # Parent directory does not exist, so SQLite cannot create the file
    bad = PersistentStore(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}")
    with pytest.raises(StorageError):
        bad.open()
    assert bad.is_open is False


def test_context_manager_opens_and_closes():
    with PersistentStore("sqlite://") as s:
        assert s.is_open
        s.add(Restaurant(name="평양면옥"))
        s.save()
        assert len(s.fetch_all()) == 1
    assert s.is_open is False
