"""
Version information endpoint.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from app.version import version_info, version_string

router = APIRouter()


class VersionResponse(BaseModel):
    """Version and build information."""

    version: str
    version_string: str
    python_version: str
    git_commit: str | None
    build_date: str
    build_number: str | None
    environment: str


@router.get(
    "",
    response_model=VersionResponse,
    summary="Get version information",
    description="Returns the running version with git and build metadata",
)
async def get_version() -> dict[str, Any]:
    return {**version_info(), "version_string": version_string()}
