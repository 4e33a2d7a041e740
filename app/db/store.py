"""
app/db/store.py

Purpose: Generic record store over MongoDB

- insert / select / select_one / get / update / delete by table name
- Records carry a string `id` (uuid4), stored as the document `_id`
- Driver failures surface as StoreError, missing ids as ResourceNotFoundError
"""

import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import ResourceNotFoundError, StoreError
from app.core.logging import get_logger

logger = get_logger(__name__)

Record = Dict[str, Any]
SortSpec = Sequence[Tuple[str, bool]]  # (field, descending)


def _to_record(document: Optional[Dict[str, Any]]) -> Optional[Record]:
    if document is None:
        return None
    record = dict(document)
    record["id"] = str(record.pop("_id"))
    return record


def _to_query(filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Translates simple filters into a Mongo query.

    {"status": ["pending", "approved"]} -> {"status": {"$in": [...]}}
    {"id": "abc"}                       -> {"_id": "abc"}
    """
    query: Dict[str, Any] = {}
    for field, value in (filters or {}).items():
        key = "_id" if field == "id" else field
        if isinstance(value, (list, tuple, set)):
            query[key] = {"$in": list(value)}
        else:
            query[key] = value
    return query


class RecordStore:
    """
    Thin CRUD layer the flows and engines depend on.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.database = database

    async def insert(self, table: str, row: Record) -> Record:
        """
        Inserts a row and returns it with its id.

        Raises:
            StoreError: On constraint violation or connectivity loss
        """
        document = {key: value for key, value in row.items() if key != "id"}
        document["_id"] = row.get("id") or str(uuid.uuid4())

        try:
            await self.database[table].insert_one(document)
        except DuplicateKeyError as e:
            logger.error(f"Duplicate record in {table}: {e}")
            raise StoreError(f"Duplicate record in {table}") from e
        except PyMongoError as e:
            logger.error(f"Insert into {table} failed: {e}", exc_info=True)
            raise StoreError(f"Insert into {table} failed") from e

        return _to_record(document)

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> List[Record]:
        """
        Returns all rows matching the filters.
        """
        try:
            cursor = self.database[table].find(_to_query(filters))
            if sort:
                cursor = cursor.sort([
                    ("_id" if field == "id" else field, DESCENDING if descending else ASCENDING)
                    for field, descending in sort
                ])
            if limit:
                cursor = cursor.limit(limit)
            documents = await cursor.to_list(length=limit)
        except PyMongoError as e:
            logger.error(f"Select from {table} failed: {e}", exc_info=True)
            raise StoreError(f"Select from {table} failed") from e

        return [_to_record(document) for document in documents]

    async def select_one(self, table: str, filters: Optional[Dict[str, Any]] = None) -> Optional[Record]:
        """
        Returns the first row matching the filters, or None.
        """
        try:
            document = await self.database[table].find_one(_to_query(filters))
        except PyMongoError as e:
            logger.error(f"Select from {table} failed: {e}", exc_info=True)
            raise StoreError(f"Select from {table} failed") from e

        return _to_record(document)

    async def get(self, table: str, record_id: str) -> Optional[Record]:
        return await self.select_one(table, {"id": record_id})

    async def update(self, table: str, record_id: str, patch: Record) -> Record:
        """
        Applies a partial update and returns the updated row.

        Raises:
            ResourceNotFoundError: If no row has this id
            StoreError: On driver failure
        """
        changes = {key: value for key, value in patch.items() if key != "id"}

        try:
            document = await self.database[table].find_one_and_update(
                {"_id": record_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Update of {table}/{record_id} failed: {e}", exc_info=True)
            raise StoreError(f"Update of {table} failed") from e

        if document is None:
            raise ResourceNotFoundError(f"No record {record_id} in {table}")

        return _to_record(document)

    async def delete(self, table: str, record_id: str) -> None:
        try:
            result = await self.database[table].delete_one({"_id": record_id})
        except PyMongoError as e:
            logger.error(f"Delete of {table}/{record_id} failed: {e}", exc_info=True)
            raise StoreError(f"Delete from {table} failed") from e

        if result.deleted_count == 0:
            raise ResourceNotFoundError(f"No record {record_id} in {table}")
