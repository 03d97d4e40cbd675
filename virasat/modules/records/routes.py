from fastapi import APIRouter, Body, Depends
from virasat.core.dependencies import get_current_user, get_user_supabase
from virasat.config.entities_config import get_family_catalog
from virasat.modules.records.engine import ScopedCrudEngine
from virasat.modules.records.families import EntityFamily, get_family
from virasat.modules.records.schemas import RecordResponse, FamilyInfo
from supabase import Client
from typing import Any, Dict, List

router = APIRouter(prefix="/records", tags=["records"])


def resolve_family(family: str) -> EntityFamily:
    return get_family(family)


def get_engine(
    user_data: Dict = Depends(get_current_user),
    entity_family: EntityFamily = Depends(resolve_family),
    supabase: Client = Depends(get_user_supabase),
) -> ScopedCrudEngine:
    return ScopedCrudEngine(supabase, entity_family, user_data["id"])


@router.get("", response_model=List[FamilyInfo])
async def list_families():
    """Record families with their form fields and option labels"""
    return get_family_catalog()


@router.get("/{family}", response_model=List[RecordResponse])
def list_records(engine: ScopedCrudEngine = Depends(get_engine)):
    """List the caller's records of one family, newest first"""
    return engine.list()


@router.post("/{family}", response_model=RecordResponse, status_code=201)
def create_record(
    fields: Dict[str, Any] = Body(...),
    engine: ScopedCrudEngine = Depends(get_engine)
):
    """Add a record; owner is taken from the session"""
    return engine.create(fields)


@router.put("/{family}/{record_id}", response_model=RecordResponse)
def replace_record(
    record_id: int,
    fields: Dict[str, Any] = Body(...),
    engine: ScopedCrudEngine = Depends(get_engine)
):
    """Replace all fields of a record"""
    return engine.replace(record_id, fields)


@router.delete("/{family}/{record_id}", status_code=204)
def delete_record(
    record_id: int,
    engine: ScopedCrudEngine = Depends(get_engine)
):
    """Delete a record permanently"""
    engine.delete(record_id)
    return None
