from __future__ import annotations

import dataclasses
import itertools
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Mapping

from camera_rental.models.inventory_models import (
    DEFAULT_RENTAL_STATUS,
    STATUS_CANCELLED,
    Camera,
    RentalRequest,
)
from camera_rental.store.base import InventoryStore


STORE_LOGGER = logging.getLogger("camera_rental.store")

_CAMERA_FIELDS = {f.name for f in dataclasses.fields(Camera)} - {"id"}
_RENTAL_FIELDS = {f.name for f in dataclasses.fields(RentalRequest)} - {"id", "created_at"}

SAMPLE_CATALOG = [
    {
        "name": "Veo Sports Camera",
        "description": "Perfect for capturing sports events and action shots",
        "category": "Sports Camera",
        "price_per_day": 35,
        "total_units": 8,
        "available_units": 5,
        "specifications": ["4K Video Recording", "8-hour Battery Life", "High-speed Capture (120fps)"],
        "image_url": "https://images.unsplash.com/photo-1593080358201-08e4ff5f93d9?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80",
    },
    {
        "name": "Advanced Veo Sports Camera",
        "description": "Professional-grade sports camera with advanced features",
        "category": "Sports Camera",
        "price_per_day": 45,
        "total_units": 5,
        "available_units": 2,
        "specifications": ["5K Video Recording", "10-hour Battery Life", "Ultra High-speed (240fps)"],
        "image_url": "https://images.unsplash.com/photo-1516724562728-afc824a36e84?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80",
    },
    {
        "name": "Veo Pro Sports Camera",
        "description": "Top-of-the-line sports camera for professional use",
        "category": "Sports Camera",
        "price_per_day": 60,
        "total_units": 3,
        "available_units": 0,
        "specifications": ["6K Video Recording", "12-hour Battery Life", "Professional Grade (360fps)"],
        "image_url": "https://images.unsplash.com/photo-1613291261423-0e0097215311?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80",
    },
]


def _copy_camera(camera: Camera) -> Camera:
    return dataclasses.replace(camera, specifications=list(camera.specifications))


def _copy_rental(rental: RentalRequest) -> RentalRequest:
    return dataclasses.replace(rental)


class MemoryInventoryStore(InventoryStore):
    """Process-lifetime store backed by two id-keyed dicts.

    Every operation holds ``self._lock`` for its whole read-modify-write, so a
    reconciliation step can never interleave with another request's update of
    the same camera.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cameras: dict[int, Camera] = {}
        self._rentals: dict[int, RentalRequest] = {}
        self._camera_ids = itertools.count(1)
        self._rental_ids = itertools.count(1)

    def list_cameras(self) -> list[Camera]:
        with self._lock:
            return [_copy_camera(camera) for camera in self._cameras.values()]

    def get_camera(self, camera_id: int) -> Camera | None:
        with self._lock:
            camera = self._cameras.get(camera_id)
            return _copy_camera(camera) if camera else None

    def create_camera(self, fields: Mapping[str, Any]) -> Camera:
        values = {key: value for key, value in fields.items() if key in _CAMERA_FIELDS}
        with self._lock:
            camera = Camera(id=next(self._camera_ids), **values)
            camera.specifications = list(camera.specifications)
            self._cameras[camera.id] = camera
            return _copy_camera(camera)

    def update_camera(self, camera_id: int, fields: Mapping[str, Any]) -> Camera | None:
        values = {key: value for key, value in fields.items() if key in _CAMERA_FIELDS}
        if "specifications" in values:
            values["specifications"] = list(values["specifications"])
        with self._lock:
            camera = self._cameras.get(camera_id)
            if camera is None:
                return None
            updated = dataclasses.replace(camera, **values)
            self._cameras[camera_id] = updated
            return _copy_camera(updated)

    def delete_camera(self, camera_id: int) -> bool:
        with self._lock:
            return self._cameras.pop(camera_id, None) is not None

    def list_rental_requests(self) -> list[RentalRequest]:
        with self._lock:
            return [_copy_rental(rental) for rental in self._rentals.values()]

    def get_rental_request(self, rental_id: int) -> RentalRequest | None:
        with self._lock:
            rental = self._rentals.get(rental_id)
            return _copy_rental(rental) if rental else None

    def create_rental_request(self, fields: Mapping[str, Any]) -> RentalRequest:
        values = {key: value for key, value in fields.items() if key in _RENTAL_FIELDS}
        if not values.get("status"):
            values["status"] = DEFAULT_RENTAL_STATUS
        with self._lock:
            rental = RentalRequest(id=next(self._rental_ids), created_at=datetime.now(timezone.utc), **values)
            self._rentals[rental.id] = rental

            camera = self._cameras.get(rental.camera_id)
            if camera and camera.available_units >= rental.quantity:
                camera.available_units -= rental.quantity
                STORE_LOGGER.info(
                    "Units taken camera_id=%s rental_id=%s quantity=%s available=%s",
                    camera.id,
                    rental.id,
                    rental.quantity,
                    camera.available_units,
                )
            else:
                STORE_LOGGER.warning(
                    "Inventory not adjusted rental_id=%s camera_id=%s quantity=%s reason=%s",
                    rental.id,
                    rental.camera_id,
                    rental.quantity,
                    "camera_missing" if camera is None else "insufficient_units",
                )
            return _copy_rental(rental)

    def update_rental_request_status(self, rental_id: int, status: str) -> RentalRequest | None:
        with self._lock:
            rental = self._rentals.get(rental_id)
            if rental is None:
                return None

            delta = 0
            if status == STATUS_CANCELLED and rental.status != STATUS_CANCELLED:
                delta = rental.quantity
            elif rental.status == STATUS_CANCELLED and status != STATUS_CANCELLED:
                delta = -rental.quantity

            if delta:
                camera = self._cameras.get(rental.camera_id)
                if camera:
                    camera.available_units += delta
                    STORE_LOGGER.info(
                        "Units %s camera_id=%s rental_id=%s quantity=%s available=%s",
                        "returned" if delta > 0 else "re-taken",
                        camera.id,
                        rental.id,
                        rental.quantity,
                        camera.available_units,
                    )

            rental.status = status
            return _copy_rental(rental)


def seed_sample_catalog(store: InventoryStore) -> list[Camera]:
    return [store.create_camera(fields) for fields in SAMPLE_CATALOG]
