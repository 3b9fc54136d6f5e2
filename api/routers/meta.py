"""Version endpoint."""

from fastapi import APIRouter

from api.schemas import VersionResponse
from config import get_version

router = APIRouter()


@router.get("/version", response_model=VersionResponse)
def version():
    return VersionResponse(version=get_version())
