"""
Flat record store used by the repositories.

A store holds rows of scalar fields keyed on "id". The production
implementation is a MongoDB collection; tests use an in-memory fake with
the same three operations.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from co2re_hub.core.config import Settings
from co2re_hub.core.errors import PersistenceError
from co2re_hub.core.utils import utc_now_iso

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class RecordStore(Protocol):
    """Operations the repositories need from a store."""

    def list(
        self,
        where: Optional[Row] = None,
        order_by: Optional[Dict[str, str]] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        ...

    def create(self, record: Row) -> Row:
        ...

    def update(self, record_id: str, fields: Row) -> None:
        ...


class MongoRecordStore:
    """
    RecordStore backed by one MongoDB collection.

    Usage:
        store = MongoRecordStore.from_settings(settings, settings.documents_collection)
        rows = store.list(where={"category": "MRV & Monitoring"}, order_by={"relevanceScore": "desc"})
    """

    def __init__(self, collection):
        """
        Args:
            collection: pymongo Collection
        """
        self.collection = collection

    @classmethod
    def from_settings(cls, settings: Settings, collection_name: str, client: Optional[MongoClient] = None):
        """
        Open the named collection using the configured connection.

        Args:
            settings: Runtime settings (URI and database)
            collection_name: Collection to bind
            client: Optional shared MongoClient
        """
        client = client or MongoClient(settings.mongo_uri)
        collection = client[settings.database][collection_name]
        try:
            collection.create_index("id", unique=True)
        except PyMongoError as e:
            raise PersistenceError(f"Cannot open {settings.database}.{collection_name}: {e}") from e
        logger.info(f"Connected to {settings.database}.{collection_name}")
        return cls(collection)

    def list(
        self,
        where: Optional[Row] = None,
        order_by: Optional[Dict[str, str]] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """
        Rows matching every field in `where`, optionally sorted and limited.

        Args:
            where: Field equality filter
            order_by: {field: "asc" | "desc"}
            limit: Maximum rows returned

        Raises:
            PersistenceError: On any database error
        """
        try:
            cursor = self.collection.find(dict(where or {}), {"_id": 0})
            if order_by:
                cursor = cursor.sort([
                    (name, DESCENDING if direction == "desc" else ASCENDING)
                    for name, direction in order_by.items()
                ])
            if limit:
                cursor = cursor.limit(limit)
            return list(cursor)
        except PyMongoError as e:
            raise PersistenceError(f"List failed: {e}") from e

    def create(self, record: Row) -> Row:
        """
        Insert a new row.

        Raises:
            PersistenceError: On duplicate id or any database error
        """
        try:
            self.collection.insert_one(dict(record))
        except PyMongoError as e:
            raise PersistenceError(f"Create failed for {record.get('id')}: {e}") from e
        return record

    def update(self, record_id: str, fields: Row) -> None:
        """
        Set fields on an existing row.

        Raises:
            PersistenceError: If the row does not exist or the write fails
        """
        try:
            result = self.collection.update_one({"id": record_id}, {"$set": dict(fields)})
        except PyMongoError as e:
            raise PersistenceError(f"Update failed for {record_id}: {e}") from e
        if result.matched_count == 0:
            raise PersistenceError(f"No record with id {record_id}")


@dataclass
class UpsertSummary:
    """Outcome of a batch upsert."""
    created: int = 0
    updated: int = 0
    failed: int = 0

    @property
    def stored(self) -> int:
        return self.created + self.updated


def upsert_row(store: RecordStore, row: Row, on_create: Optional[Row] = None) -> str:
    """
    Insert the row if its id is unknown, otherwise update it in place.

    createdAt is only written on insert; updatedAt on every write.

    Args:
        store: Target store
        row: Full row including "id"
        on_create: Extra fields written only on insert (e.g. isActive)

    Returns:
        "created" or "updated"

    Raises:
        PersistenceError: If the store rejects the read or write
    """
    now = utc_now_iso()
    existing = store.list(where={"id": row["id"]}, limit=1)

    if not existing:
        record = dict(row)
        record.update(on_create or {})
        record["createdAt"] = now
        record["updatedAt"] = now
        store.create(record)
        return "created"

    fields = {k: v for k, v in row.items() if k not in ("id", "createdAt")}
    fields["updatedAt"] = now
    store.update(row["id"], fields)
    return "updated"
