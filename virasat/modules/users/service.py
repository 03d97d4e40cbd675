from supabase import Client
from virasat.modules.users.schemas import ProfileUpdate, ProfileResponse
from virasat.core.errors import StoreError
from datetime import datetime, timezone
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_data: Dict[str, Any]) -> ProfileResponse:
        """Profile row for the session owner, or one built from signup metadata"""
        user_id = user_data["id"]
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to load profile for {user_id}: {e}")
            raise StoreError("Failed to load profile")

        if result.data:
            return ProfileResponse(**result.data[0])
        metadata = user_data.get("user_metadata") or {}
        return ProfileResponse(
            user_id=user_id,
            email=user_data.get("email"),
            full_name=metadata.get("full_name"),
            phone=metadata.get("phone"),
            created_at=user_data.get("created_at"),
        )

    def update_profile(self, user_data: Dict[str, Any], profile_data: ProfileUpdate) -> ProfileResponse:
        """Upsert the owner's profile row"""
        user_id = user_data["id"]
        update_data = {
            "user_id": user_id,
            "email": user_data.get("email"),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        if profile_data.full_name is not None:
            update_data["full_name"] = profile_data.full_name.strip()
        if profile_data.phone is not None:
            update_data["phone"] = profile_data.phone.strip()

        try:
            result = self.supabase.table("profiles")\
                .upsert(update_data, on_conflict="user_id")\
                .execute()
        except Exception as e:
            logger.error(f"Failed to update profile for {user_id}: {e}")
            raise StoreError("Failed to update profile")

        if not result.data:
            raise StoreError("Failed to update profile")
        return ProfileResponse(**result.data[0])
