"""
Caller Profile Repository
Per-business caller records plus read access to call and appointment history.
"""
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument

from .base import BaseRepository
from ..models.base import utc_now
from ..models.caller import CallerPreferences, CallerProfile
from ..utils.observability import logger

RECENT_CALLS_LIMIT = 10
RECENT_APPOINTMENTS_LIMIT = 5


class CallerProfileRepository(BaseRepository[CallerProfile]):
    """
    Repository for caller profiles, keyed by (business_id, E.164 phone).

    Phone numbers must already be normalized; see utils/phone_normalizer.py.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        super().__init__(database, "caller_profiles", CallerProfile)
        self.calls = database["calls"]
        self.appointments = database["appointments"]

    async def get_by_phone(self, business_id: str, phone_number: str) -> Optional[CallerProfile]:
        return await self.find_one({"business_id": business_id, "phone_number": phone_number})

    async def record_call(
        self,
        business_id: str,
        phone_number: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        outcome: Optional[str] = None,
        preferences: Optional[CallerPreferences] = None,
    ) -> CallerProfile:
        """
        Upsert the caller's profile after a call and increment call_count.

        Known name/email/preferences are only overwritten by non-empty values.
        """
        now = utc_now()
        updates: Dict[str, Any] = {
            "last_call_at": now,
            "last_outcome": outcome,
            "updated_at": now.isoformat(),
        }
        if name:
            updates["name"] = name
        if email:
            updates["email"] = email
        if preferences:
            for key, value in preferences.model_dump(exclude_none=True).items():
                updates[f"preferences.{key}"] = value

        doc = await self.collection.find_one_and_update(
            {"business_id": business_id, "phone_number": phone_number},
            {
                "$set": updates,
                "$inc": {"call_count": 1},
                "$setOnInsert": {"created_at": now.isoformat()},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

        logger.debug(f"Recorded call for {phone_number} at {business_id}")
        return self._to_model(doc)

    async def recent_calls(
        self,
        business_id: str,
        phone_number: str,
        limit: int = RECENT_CALLS_LIMIT,
    ) -> List[Dict[str, Any]]:
        """Newest first. Rows carry `outcome`, `created_at` and optionally `sentiment`."""
        cursor = self.calls.find(
            {"business_id": business_id, "caller_number": phone_number},
            projection={"outcome": 1, "created_at": 1, "sentiment": 1},
        ).sort("created_at", DESCENDING).limit(limit)
        return await cursor.to_list(length=limit)

    async def recent_appointments(
        self,
        business_id: str,
        phone_number: str,
        limit: int = RECENT_APPOINTMENTS_LIMIT,
    ) -> List[Dict[str, Any]]:
        """Newest first. Rows carry `service_name` and `scheduled_at`."""
        cursor = self.appointments.find(
            {"business_id": business_id, "customer_phone": phone_number},
            projection={"service_name": 1, "scheduled_at": 1},
        ).sort("scheduled_at", DESCENDING).limit(limit)
        return await cursor.to_list(length=limit)
