"""Helix Tags - Router.

REST API endpoints for tag management.
"""

from fastapi import APIRouter, Depends, status

from helix.auth import get_current_user
from helix.auth.schemas import User
from helix.deps import require_tags
from helix.modules.tags.schemas import (
    TagCreate,
    TagDeleteByName,
    TagDeleteResult,
    TagListResponse,
    TagResponse,
)
from helix.modules.tags.service import TagsService, get_tags_service
from helix.schemas import ErrorResponse

router = APIRouter(
    prefix="/tags",
    tags=["Tags"],
    dependencies=[require_tags],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)


@router.get("", response_model=TagListResponse)
async def list_tags(
    user: User = Depends(get_current_user),
    service: TagsService = Depends(get_tags_service),
) -> TagListResponse:
    """List all tags of the current user, ordered by name."""
    return await service.list_tags(user)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagCreate,
    user: User = Depends(get_current_user),
    service: TagsService = Depends(get_tags_service),
) -> TagResponse:
    """Create a new tag."""
    return await service.create_tag(data, user)


@router.post("/delete", response_model=TagDeleteResult)
async def delete_tags_by_name(
    data: TagDeleteByName,
    user: User = Depends(get_current_user),
    service: TagsService = Depends(get_tags_service),
) -> TagDeleteResult:
    """Delete every tag document matching the given names."""
    return await service.delete_tags_by_name(data, user)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    user: User = Depends(get_current_user),
    service: TagsService = Depends(get_tags_service),
):
    """Delete a tag by id."""
    await service.delete_tag(tag_id, user)
    return None
