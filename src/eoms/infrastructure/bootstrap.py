"""Composition root: builds the order store over the JSON storage file.

The only module that imports concrete storage classes; everything else
works against `StoreRepository`.
"""

from __future__ import annotations

import os
from pathlib import Path

from eoms.application.order_store import OrderStore
from eoms.infrastructure.persistence.key_value_storage import JsonFileStorage
from eoms.infrastructure.persistence.key_value_store_repository import (
    KeyValueStoreRepository,
)

DATA_DIR_ENV = "EOMS_DATA_DIR"
STORAGE_FILENAME = "storage.json"

# Default data directory sits at the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else _DEFAULT_DATA_DIR


def storage() -> JsonFileStorage:
    return JsonFileStorage(data_dir() / STORAGE_FILENAME)


def order_store() -> OrderStore:
    return OrderStore(repository=KeyValueStoreRepository(storage()))
