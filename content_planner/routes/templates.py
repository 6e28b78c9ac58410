"""
Template routes: read-only listing and premium-gated application.
"""
from fastapi import APIRouter, Depends
from typing import List, Optional

from ..auth import get_current_user
from ..dependencies import get_content_service, get_storage
from ..models.user import User
from ..responses import not_found
from ..schemas.template import TemplatePrefill, TemplateResponse
from ..services.content import ContentService
from ..services.policy import can_apply_template
from ..storage import Storage

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=List[TemplateResponse])
def get_templates(
    platform: Optional[str] = None,
    category: Optional[str] = None,
    storage: Storage = Depends(get_storage),
):
    """List all templates; premium ones are visible to everyone."""
    return storage.list_templates(platform=platform, category=category)


@router.get("/{template_id}")
def get_template(
    template_id: str,
    storage: Storage = Depends(get_storage),
    current_user: Optional[User] = Depends(get_current_user),
):
    template = storage.get_template(template_id)
    if not template:
        not_found("Template")
    data = TemplateResponse.model_validate(template).model_dump(mode="json")
    data["can_apply"] = can_apply_template(current_user, template)
    return data


@router.post("/{template_id}/apply", response_model=TemplatePrefill)
def apply_template(
    template_id: str,
    storage: Storage = Depends(get_storage),
    service: ContentService = Depends(get_content_service),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Return draft fields prefilled from the template."""
    template = storage.get_template(template_id)
    if not template:
        not_found("Template")
    return service.apply_template(current_user, template)
