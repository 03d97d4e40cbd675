"""
Owner-scoped list/create/replace/delete against one Supabase table.

One engine class serves all ten record families; the family supplies the
table name, the form schema and the mandatory fields. Every query carries
`user_id = owner`; tables are also expected to have RLS policies (see models.py).
"""

from supabase import Client
from pydantic import ValidationError
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from virasat.core.errors import AuthRequired, RecordNotFound, StoreError, ValidationFailed
from virasat.modules.records.families import EntityFamily

logger = logging.getLogger(__name__)


class ScopedCrudEngine:
    def __init__(self, supabase: Client, family: EntityFamily, owner_id: Optional[str]):
        self.supabase = supabase
        self.family = family
        self.owner_id = owner_id

    def _require_owner(self) -> str:
        if not self.owner_id:
            raise AuthRequired()
        return self.owner_id

    def validate(self, fields: Optional[Dict[str, Any]]) -> Dict[str, Optional[str]]:
        """Clean submitted form fields; raise ValidationFailed if a mandatory one is blank"""
        try:
            payload = self.family.schema.model_validate(fields or {})
        except ValidationError as e:
            bad_fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise ValidationFailed("Invalid field values", missing_fields=bad_fields)

        cleaned: Dict[str, Optional[str]] = {}
        for name, value in payload.model_dump().items():
            if isinstance(value, str):
                value = value.strip()
            cleaned[name] = value if value else None
        for name, default in self.family.defaults.items():
            if not cleaned.get(name):
                cleaned[name] = default

        missing = [name for name in self.family.required if not cleaned.get(name)]
        if missing:
            raise ValidationFailed(missing_fields=missing)
        return cleaned

    def list(self) -> List[Dict[str, Any]]:
        """All rows owned by the caller, newest first"""
        owner_id = self._require_owner()
        try:
            result = self.supabase.table(self.family.table)\
                .select("*")\
                .eq("user_id", owner_id)\
                .order("created_at", desc=True)\
                .order("id", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to list {self.family.table} for {owner_id}: {e}")
            raise StoreError(f"Failed to load {self.family.label}")
        return result.data or []

    def create(self, fields: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Insert a row owned by the caller and return it with store-assigned columns"""
        owner_id = self._require_owner()
        row = self.validate(fields)
        # owner always comes from the session, never from the submitted fields
        row["user_id"] = owner_id
        try:
            result = self.supabase.table(self.family.table).insert(row).execute()
        except Exception as e:
            logger.error(f"Failed to insert into {self.family.table}: {e}")
            raise StoreError(f"Failed to add {self.family.label}")
        if not result.data:
            raise StoreError(f"Failed to add {self.family.label}")
        logger.info(f"Created {self.family.table} row {result.data[0].get('id')} for {owner_id}")
        return result.data[0]

    def replace(self, record_id: int, fields: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Overwrite every domain field of one of the caller's rows"""
        owner_id = self._require_owner()
        row = self.validate(fields)
        row["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table(self.family.table)\
                .update(row)\
                .eq("id", record_id)\
                .eq("user_id", owner_id)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to update {self.family.table} row {record_id}: {e}")
            raise StoreError(f"Failed to update {self.family.label}")
        if not result.data:
            raise RecordNotFound()
        return result.data[0]

    def delete(self, record_id: int) -> None:
        """Hard-delete one of the caller's rows; other rows are never touched"""
        owner_id = self._require_owner()
        try:
            result = self.supabase.table(self.family.table)\
                .delete()\
                .eq("id", record_id)\
                .eq("user_id", owner_id)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to delete {self.family.table} row {record_id}: {e}")
            raise StoreError(f"Failed to remove {self.family.label}")
        if not result.data:
            raise RecordNotFound()
        logger.info(f"Deleted {self.family.table} row {record_id} for {owner_id}")

    def count(self) -> int:
        owner_id = self._require_owner()
        try:
            result = self.supabase.table(self.family.table)\
                .select("id", count="exact")\
                .eq("user_id", owner_id)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to count {self.family.table}: {e}")
            raise StoreError(f"Failed to load {self.family.label}")
        return result.count or 0
