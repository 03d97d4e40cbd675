from fastapi import APIRouter, Depends
from virasat.core.dependencies import get_current_user, get_user_supabase
from virasat.modules.users.schemas import ProfileUpdate, ProfileResponse
from virasat.modules.users.service import ProfileService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_profile_service(supabase: Client = Depends(get_user_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user's profile"""
    return service.get_profile(user_data)


@router.put("/me", response_model=ProfileResponse)
def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update the current user's name and phone"""
    return service.update_profile(user_data, profile_data)
