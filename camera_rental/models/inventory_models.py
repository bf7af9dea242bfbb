from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"

RENTAL_STATUSES = (
    STATUS_PENDING,
    STATUS_APPROVED,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
)
DEFAULT_RENTAL_STATUS = STATUS_PENDING


@dataclass
class Camera:
    id: int
    name: str
    description: str
    category: str
    price_per_day: float
    total_units: int
    available_units: int
    image_url: str
    specifications: list[str] = field(default_factory=list)


@dataclass
class RentalRequest:
    id: int
    camera_id: int
    customer_name: str
    customer_email: str
    customer_phone: str
    start_date: datetime
    end_date: datetime
    quantity: int
    total_price: float
    created_at: datetime
    status: str = DEFAULT_RENTAL_STATUS
