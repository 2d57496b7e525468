"""
Business Repository
Read access to the embedded business documents prompt generation consumes.
"""
from typing import Any, Dict, Optional
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import ValidationError as PydanticValidationError

from .base import to_object_id
from ..core.exceptions import ValidationError
from ..models.snapshot import BusinessSnapshot
from ..utils.observability import logger


class BusinessRepository:
    """
    Loads `businesses` documents as BusinessSnapshot.

    Writes happen in the dashboard that owns this collection; this
    repository only reads.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection: AsyncIOMotorCollection = database["businesses"]

    def _id_filter(self, business_id: str) -> Dict[str, Any]:
        object_id = to_object_id(business_id)
        return {"_id": object_id if object_id is not None else business_id}

    async def get_snapshot(self, business_id: str) -> Optional[BusinessSnapshot]:
        """
        Args:
            business_id: ObjectId string (plain string ids are also accepted)

        Returns:
            BusinessSnapshot or None if no such business exists

        Raises:
            ValidationError: the stored document does not fit BusinessSnapshot
        """
        doc = await self.collection.find_one(self._id_filter(business_id))
        if doc is None:
            logger.debug(f"Business not found: {business_id}")
            return None

        doc["business_id"] = str(doc.pop("_id"))
        try:
            return BusinessSnapshot.model_validate(doc)
        except PydanticValidationError as e:
            logger.error(f"❌ Malformed business document {business_id}: {e.error_count()} errors")
            raise ValidationError(
                f"stored business document is malformed at "
                f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
                for err in e.errors()
            ) from e

