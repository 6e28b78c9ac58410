"""
Calendar export routes.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..auth import get_required_user
from ..dependencies import get_storage
from ..models.user import User
from ..responses import not_implemented
from ..services.export import export_csv
from ..services.policy import PremiumFeature, ensure_entitled
from ..storage import Storage

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("/csv")
def export_calendar_csv(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_required_user),
):
    """Download the caller's calendar as CSV."""
    items = storage.list_content_items(owner_id=current_user.id)
    return Response(
        content=export_csv(items),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="content-calendar.csv"'},
    )


@router.get("/pdf")
def export_calendar_pdf(current_user: User = Depends(get_required_user)):
    ensure_entitled(current_user, PremiumFeature.PDF_EXPORT)
    not_implemented("PDF export is not available yet")
