"""
State container for one record list screen.

Holds the rows a client is showing and applies the screen rules: load on
mount, redirect when there is no session, prepend after a successful add,
drop a row only after the store confirms its deletion, and turn every failure
into a one-shot notification while keeping the previous rows.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging

from fastapi import HTTPException

from virasat.config.settings import settings
from virasat.core.errors import AuthRequired, ValidationFailed
from virasat.modules.records.engine import ScopedCrudEngine

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    kind: str  # success | error
    title: str
    message: str


class RecordView:
    def __init__(
        self,
        engine_factory: Callable[[str], ScopedCrudEngine],
        session: Optional[Dict[str, Any]],
    ):
        self._engine_factory = engine_factory
        self.session = session
        self.rows: List[Dict[str, Any]] = []
        self.notifications: List[Notification] = []
        self.redirect_to: Optional[str] = None
        self.loading = False

    def _engine(self) -> Optional[ScopedCrudEngine]:
        owner_id = (self.session or {}).get("id")
        if not owner_id:
            self.redirect_to = settings.login_path
            return None
        return self._engine_factory(owner_id)

    def _fail(self, title: str, exc: HTTPException) -> None:
        if isinstance(exc, AuthRequired):
            self.redirect_to = exc.redirect_to
            return
        logger.warning(f"{title}: {exc.detail}")
        self.notifications.append(Notification("error", title, str(exc.detail)))

    def load(self) -> List[Dict[str, Any]]:
        engine = self._engine()
        if engine is None:
            return self.rows
        self.loading = True
        try:
            self.rows = engine.list()
        except HTTPException as e:
            self._fail("Error loading records", e)
        finally:
            self.loading = False
        return self.rows

    def add(self, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        engine = self._engine()
        if engine is None:
            return None
        try:
            row = engine.create(fields)
        except ValidationFailed as e:
            self.notifications.append(Notification("error", "Error", str(e.detail)))
            return None
        except HTTPException as e:
            self._fail("Error adding record", e)
            return None
        self.rows.insert(0, row)
        self.notifications.append(
            Notification("success", "Added successfully!", f"{engine.family.label.capitalize()} entry has been added.")
        )
        return row

    def remove(self, record_id: int) -> bool:
        engine = self._engine()
        if engine is None:
            return False
        try:
            engine.delete(record_id)
        except HTTPException as e:
            self._fail("Error removing record", e)
            return False
        self.rows = [row for row in self.rows if row.get("id") != record_id]
        self.notifications.append(
            Notification("success", "Removed", "The entry has been removed from your list.")
        )
        return True

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending
