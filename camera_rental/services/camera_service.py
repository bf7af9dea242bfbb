from __future__ import annotations

from typing import Iterable

from camera_rental.models.inventory_models import Camera


def serialize_camera(camera: Camera) -> dict:
    return {
        "id": camera.id,
        "name": camera.name,
        "description": camera.description,
        "category": camera.category,
        "pricePerDay": camera.price_per_day,
        "totalUnits": camera.total_units,
        "availableUnits": camera.available_units,
        "specifications": list(camera.specifications),
        "imageUrl": camera.image_url,
    }


def filter_by_category(cameras: Iterable[Camera], category: str | None) -> list[Camera]:
    wanted = (category or "").strip().lower()
    if not wanted or wanted == "all":
        return list(cameras)
    return [camera for camera in cameras if (camera.category or "").strip().lower() == wanted]


def filter_cameras(
    cameras: Iterable[Camera],
    category: str | None = None,
    availability: str | None = None,
    search: str | None = None,
) -> list[Camera]:
    """Catalog filter bar: category, ``availability=available`` and a
    case-insensitive search over name and description."""
    matches = filter_by_category(cameras, category)
    if (availability or "").strip().lower() == "available":
        matches = [camera for camera in matches if camera.available_units > 0]
    needle = (search or "").strip().lower()
    if needle:
        matches = [
            camera
            for camera in matches
            if needle in (camera.name or "").lower() or needle in (camera.description or "").lower()
        ]
    return matches


def list_categories(cameras: Iterable[Camera]) -> list[str]:
    seen: dict[str, str] = {}
    for camera in cameras:
        name = (camera.category or "").strip()
        if name and name.lower() not in seen:
            seen[name.lower()] = name
    return sorted(seen.values(), key=str.lower)


def map_camera_field(field: str) -> str:
    mapping = {
        "name": "name",
        "description": "description",
        "category": "category",
        "pricePerDay": "price_per_day",
        "totalUnits": "total_units",
        "availableUnits": "available_units",
        "specifications": "specifications",
        "imageUrl": "image_url",
    }
    return mapping.get(field, field)
