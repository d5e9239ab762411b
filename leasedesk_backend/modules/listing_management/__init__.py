"""Listing management module for LeaseDesk."""

from .models import (
    Listing,
    ListingStatus,
    ListingType,
    ListingVisibility,
    OccupancyStatus,
)
from .routers import router

__all__ = [
    "router",
    "Listing",
    "ListingType",
    "ListingStatus",
    "OccupancyStatus",
    "ListingVisibility",
]
