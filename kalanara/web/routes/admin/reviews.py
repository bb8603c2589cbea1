"""Moderation des avis clients."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from ....core.value_objects import AdminRole
from ...schemas import ReviewOut
from ...security import require_roles

router = APIRouter(prefix="/reviews", tags=["admin"])


@router.get("", response_model=list[ReviewOut])
def list_reviews(request: Request, min_rating: Optional[int] = None):
    container = request.app.state.container
    return container.review_service().list_reviews(min_rating)


@router.delete(
    "/{review_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(AdminRole.SUPER_ADMIN, AdminRole.MANAGER))],
)
def delete_review(review_id: str, request: Request):
    container = request.app.state.container
    container.review_service().delete_review(review_id)
