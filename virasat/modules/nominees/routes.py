from fastapi import APIRouter, Depends
from virasat.core.dependencies import get_current_user
from virasat.modules.nominees.schemas import AccessRequestCreate, AccessRequestResponse
from virasat.modules.nominees.service import NomineeAccessService
from typing import Dict, List

router = APIRouter(prefix="/nominees", tags=["nominees"])


def get_access_service() -> NomineeAccessService:
    return NomineeAccessService()


@router.post("/access-requests", response_model=AccessRequestResponse)
async def submit_access_request(
    request_data: AccessRequestCreate,
    user_data: Dict = Depends(get_current_user),
    service: NomineeAccessService = Depends(get_access_service)
):
    """Verify a .gov.in death-certificate URL for nominee access"""
    return service.submit(user_data["id"], request_data.certificate_url)


@router.get("/access-requests", response_model=List[AccessRequestResponse])
async def list_access_requests(
    user_data: Dict = Depends(get_current_user),
    service: NomineeAccessService = Depends(get_access_service)
):
    """Verified access requests for this session's owner, newest first"""
    return service.list_requests(user_data["id"])
