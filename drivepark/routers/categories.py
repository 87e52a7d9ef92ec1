from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request

from drivepark.core.utils import app_service
from drivepark.domain.listings import ListingType
from drivepark.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
def list_categories(request: Request, vertical: Optional[ListingType] = None):
    svc: CategoryService = app_service(request, "category_service")
    return svc.list_categories(vertical)
