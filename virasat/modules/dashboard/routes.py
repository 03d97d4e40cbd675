from fastapi import APIRouter, Depends
from virasat.core.dependencies import get_current_user, get_user_supabase
from virasat.modules.dashboard.schemas import DashboardResponse
from virasat.modules.dashboard.service import DashboardService
from virasat.modules.documents.routes import get_document_service
from virasat.modules.documents.service import DocumentService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(
    supabase: Client = Depends(get_user_supabase),
    documents: DocumentService = Depends(get_document_service)
) -> DashboardService:
    return DashboardService(supabase, documents)


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    user_data: Dict = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Record counts per dashboard card plus the number of uploaded documents"""
    return service.summary(user_data["id"])
