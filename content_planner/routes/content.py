"""
Content item routes for the calendar.
"""
from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List, Optional

from ..auth import get_current_user, get_required_user
from ..dependencies import get_content_service
from ..models.user import User
from ..responses import deleted, not_found
from ..schemas.content_item import ContentItemResponse
from ..services.content import ContentService

router = APIRouter(prefix="/api/content", tags=["content"])


@router.get("", response_model=List[ContentItemResponse])
def list_content(
    service: ContentService = Depends(get_content_service),
    current_user: Optional[User] = Depends(get_current_user),
):
    """List content items, scoped to the caller when authenticated."""
    owner_id = current_user.id if current_user else None
    return service.list(owner_id)


@router.get("/{item_id}", response_model=ContentItemResponse)
def get_content(
    item_id: str,
    service: ContentService = Depends(get_content_service),
    current_user: Optional[User] = Depends(get_current_user),
):
    owner_id = current_user.id if current_user else None
    item = service.get(item_id, owner_id)
    if not item:
        not_found("Content item")
    return item


@router.post("", response_model=ContentItemResponse, status_code=201)
def create_content(
    payload: Dict[str, Any] = Body(...),
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_required_user),
):
    """Create a content item owned by the caller."""
    return service.create(current_user.id, payload)


@router.api_route("/{item_id}", methods=["PUT", "PATCH"], response_model=ContentItemResponse)
def update_content(
    item_id: str,
    payload: Dict[str, Any] = Body(...),
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_required_user),
):
    """Partially update a content item (must belong to current user)."""
    item = service.update(item_id, payload, owner_id=current_user.id)
    if not item:
        not_found("Content item")
    return item


@router.delete("/{item_id}")
def delete_content(
    item_id: str,
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_required_user),
):
    """Delete a content item (must belong to current user)."""
    if not service.delete(item_id, owner_id=current_user.id):
        not_found("Content item")
    return deleted("Content item deleted successfully")
