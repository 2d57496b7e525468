"""
Generic Repository Base Class
Async CRUD foundation shared by the MongoDB-backed repositories.
"""
from typing import Generic, TypeVar, Type, Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId
import datetime as dt

from ..models.base import MongoBaseModel
from ..utils.observability import logger

# Generic type for domain models
T = TypeVar("T", bound=MongoBaseModel)


def to_object_id(document_id: str) -> Optional[ObjectId]:
    """Parse a string id. Malformed ids return None instead of raising."""
    try:
        return ObjectId(document_id)
    except (InvalidId, TypeError):
        return None


class BaseRepository(Generic[T]):
    """
    Generic async repository for MongoDB collections.
    Provides type-safe CRUD operations for domain models.

    Usage:
        class CallerProfileRepository(BaseRepository[CallerProfile]):
            def __init__(self, database: AsyncIOMotorDatabase):
                super().__init__(database, "caller_profiles", CallerProfile)
    """

    def __init__(
        self,
        database: AsyncIOMotorDatabase,
        collection_name: str,
        model_class: Type[T]
    ):
        self.database = database
        self.collection: AsyncIOMotorCollection = database[collection_name]
        self.model_class = model_class
        self.collection_name = collection_name

    def _to_document(self, document: T) -> Dict[str, Any]:
        doc_dict = document.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
        for computed_field in type(document).model_computed_fields:
            doc_dict.pop(computed_field, None)
        return doc_dict

    async def create(self, document: T) -> T:
        """
        Insert a new document into the collection.

        Frozen models are never mutated; a stamped copy is returned instead.

        Returns:
            The created document with `_id` populated

        Raises:
            pymongo.errors.DuplicateKeyError: If unique constraint violated
        """
        now = dt.datetime.now(dt.UTC)
        stamped = document.model_copy(update={"created_at": now, "updated_at": now})

        result = await self.collection.insert_one(self._to_document(stamped))

        logger.debug(f"Created document in {self.collection_name}: {result.inserted_id}")

        return stamped.model_copy(update={"id": str(result.inserted_id)})

    async def find_by_id(self, document_id: str) -> Optional[T]:
        """
        Retrieve a document by its MongoDB ObjectId.

        Returns:
            Domain model instance or None if not found (or the id is malformed)
        """
        object_id = to_object_id(document_id)
        if object_id is None:
            return None

        doc = await self.collection.find_one({"_id": object_id})
        if doc is None:
            return None

        return self._to_model(doc)

    async def find_one(self, filter_dict: Dict[str, Any]) -> Optional[T]:
        doc = await self.collection.find_one(filter_dict)

        if doc is None:
            return None

        return self._to_model(doc)

    async def find_many(
        self,
        filter_dict: Dict[str, Any],
        limit: int = 100,
        skip: int = 0,
        sort: Optional[List[tuple]] = None
    ) -> List[T]:
        """
        Retrieve multiple documents matching the filter.

        Args:
            filter_dict: MongoDB query filter
            limit: Maximum number of documents to return
            skip: Number of documents to skip (pagination)
            sort: List of (field, direction) tuples for sorting
        """
        cursor = self.collection.find(filter_dict)

        if sort:
            cursor = cursor.sort(sort)

        cursor = cursor.skip(skip).limit(limit)
        docs = await cursor.to_list(length=limit)

        return [self._to_model(doc) for doc in docs]

    async def update_fields(self, document_id: str, fields: Dict[str, Any]) -> bool:
        """
        Apply a partial `$set` to one document, bumping `updated_at`.

        Returns:
            True if a document matched
        """
        object_id = to_object_id(document_id)
        if object_id is None:
            return False

        result = await self.collection.update_one(
            {"_id": object_id},
            {"$set": {**fields, "updated_at": dt.datetime.now(dt.UTC).isoformat()}}
        )

        if result.matched_count:
            logger.debug(f"Updated document in {self.collection_name}: {document_id}")
        return result.matched_count > 0

    async def delete(self, document_id: str) -> bool:
        object_id = to_object_id(document_id)
        if object_id is None:
            return False

        result = await self.collection.delete_one({"_id": object_id})

        if result.deleted_count > 0:
            logger.debug(f"Deleted document from {self.collection_name}: {document_id}")
            return True

        return False

    async def count(self, filter_dict: Optional[Dict[str, Any]] = None) -> int:
        filter_dict = filter_dict or {}
        return await self.collection.count_documents(filter_dict)

    def _to_model(self, doc: Dict[str, Any]) -> T:
        """
        Convert MongoDB document to Pydantic model instance.
        Fields the model doesn't declare are dropped.
        """
        if "_id" in doc:
            doc["_id"] = str(doc["_id"])

        model_fields = self.model_class.model_fields.keys()

        cleaned_doc = {
            k: v for k, v in doc.items()
            if k in model_fields or k == "_id"
        }

        return self.model_class.model_validate(cleaned_doc)
