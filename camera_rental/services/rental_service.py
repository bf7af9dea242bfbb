from __future__ import annotations

import math
from datetime import date, datetime, timezone

from camera_rental.models.inventory_models import Camera, RentalRequest


class InventoryError(RuntimeError):
    pass


class CameraNotFoundError(InventoryError):
    def __init__(self, camera_id: int):
        super().__init__("Camera not found")
        self.camera_id = camera_id


class InsufficientUnitsError(InventoryError):
    def __init__(self, available: int, requested: int):
        super().__init__(f"Not enough units available. Only {available} units left.")
        self.available = available
        self.requested = requested


def format_request_number(rental_id: int, prefix: str = "RNT") -> str:
    return f"{prefix}-{rental_id:04d}"


def _as_utc_datetime(value: date | datetime) -> datetime:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def rental_days(start: date | datetime, end: date | datetime) -> int:
    seconds = (_as_utc_datetime(end) - _as_utc_datetime(start)).total_seconds()
    return max(math.ceil(seconds / 86400), 1)


def calculate_total_price(price_per_day: float, start: date | datetime, end: date | datetime, quantity: int) -> float:
    return round(float(price_per_day) * rental_days(start, end) * max(int(quantity), 0), 2)


def check_availability(camera: Camera | None, camera_id: int, quantity: int) -> Camera:
    if camera is None:
        raise CameraNotFoundError(camera_id)
    if camera.available_units < quantity:
        raise InsufficientUnitsError(camera.available_units, quantity)
    return camera


def map_rental_field(field: str) -> str:
    mapping = {
        "cameraId": "camera_id",
        "customerName": "customer_name",
        "customerEmail": "customer_email",
        "customerPhone": "customer_phone",
        "startDate": "start_date",
        "endDate": "end_date",
        "quantity": "quantity",
        "totalPrice": "total_price",
        "status": "status",
    }
    return mapping.get(field, field)


def serialize_rental_request(rental: RentalRequest) -> dict:
    return {
        "id": rental.id,
        "cameraId": rental.camera_id,
        "customerName": rental.customer_name,
        "customerEmail": rental.customer_email,
        "customerPhone": rental.customer_phone,
        "startDate": rental.start_date,
        "endDate": rental.end_date,
        "quantity": rental.quantity,
        "totalPrice": rental.total_price,
        "status": rental.status,
        "createdAt": rental.created_at,
    }


def describe_rental(rental: RentalRequest) -> str:
    return (
        f"camera_id={rental.camera_id} customer={rental.customer_name!r} "
        f"email={rental.customer_email} phone={rental.customer_phone} "
        f"dates={rental.start_date.date().isoformat()}..{rental.end_date.date().isoformat()} "
        f"quantity={rental.quantity} total_price={rental.total_price:.2f} status={rental.status}"
    )
