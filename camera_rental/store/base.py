"""Operation contract shared by every inventory store backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from camera_rental.models.inventory_models import Camera, RentalRequest


class InventoryStore(ABC):
    """Authoritative holder of cameras and rental requests.

    Implementations own id generation and the availability bookkeeping that
    happens when rental requests are created or move in or out of the
    ``cancelled`` status. Callers only ever receive detached copies of the
    stored records.
    """

    @abstractmethod
    def list_cameras(self) -> list[Camera]:
        """Return every camera in insertion order."""

    @abstractmethod
    def get_camera(self, camera_id: int) -> Camera | None:
        """Return the camera or ``None`` when it does not exist."""

    @abstractmethod
    def create_camera(self, fields: Mapping[str, Any]) -> Camera:
        """Store a new camera under the next id.

        ``available_units`` is stored exactly as given.
        """

    @abstractmethod
    def update_camera(self, camera_id: int, fields: Mapping[str, Any]) -> Camera | None:
        """Shallow-merge ``fields`` over the stored camera."""

    @abstractmethod
    def delete_camera(self, camera_id: int) -> bool:
        """Remove the camera and report whether it existed."""

    @abstractmethod
    def list_rental_requests(self) -> list[RentalRequest]:
        """Return every rental request in insertion order."""

    @abstractmethod
    def get_rental_request(self, rental_id: int) -> RentalRequest | None:
        """Return the rental request or ``None`` when it does not exist."""

    @abstractmethod
    def create_rental_request(self, fields: Mapping[str, Any]) -> RentalRequest:
        """Store a new rental request and take its units from the camera pool.

        The request is stored even when the camera is missing or short on
        units; in that case inventory is left untouched.
        """

    @abstractmethod
    def update_rental_request_status(self, rental_id: int, status: str) -> RentalRequest | None:
        """Persist a new status, returning or re-taking units on cancel toggles."""
