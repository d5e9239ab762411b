"""Property management module for LeaseDesk.

Properties, units, leasing terms and the media attached to them.
"""

from .models import (
    Amenity,
    FileType,
    LeaseDuration,
    Property,
    PropertyAttachment,
    PropertyLeasing,
    PropertyPhoto,
    PropertyStatus,
    PropertyType,
    Unit,
)

__all__ = [
    # Models
    "Property",
    "Unit",
    "PropertyLeasing",
    "Amenity",
    "PropertyPhoto",
    "PropertyAttachment",
    # Enums
    "PropertyType",
    "PropertyStatus",
    "LeaseDuration",
    "FileType",
]
