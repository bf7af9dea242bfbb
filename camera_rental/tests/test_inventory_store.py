import unittest
from datetime import datetime, timezone

from camera_rental.store.base import InventoryStore
from camera_rental.store.memory import SAMPLE_CATALOG, MemoryInventoryStore, seed_sample_catalog


def camera_fields(**overrides):
    fields = {
        "name": "Veo Sports Camera",
        "description": "Sports camera",
        "category": "Sports Camera",
        "price_per_day": 35.0,
        "total_units": 1,
        "available_units": 1,
        "specifications": ["4K Video Recording"],
        "image_url": "https://example.com/veo.jpg",
    }
    fields.update(overrides)
    return fields


def rental_fields(camera_id, quantity=1, **overrides):
    fields = {
        "camera_id": camera_id,
        "customer_name": "Jamie Doe",
        "customer_email": "jamie@example.com",
        "customer_phone": "555-0100",
        "start_date": datetime(2026, 3, 1),
        "end_date": datetime(2026, 3, 4),
        "quantity": quantity,
        "total_price": 105.0,
    }
    fields.update(overrides)
    return fields


class MemoryInventoryStoreTests(unittest.TestCase):
    def setUp(self):
        self.store = MemoryInventoryStore()

    def test_is_an_inventory_store(self):
        self.assertIsInstance(self.store, InventoryStore)

    def test_ids_are_monotonic_and_never_reused(self):
        first = self.store.create_camera(camera_fields())
        second = self.store.create_camera(camera_fields())
        self.assertEqual((first.id, second.id), (1, 2))
        self.assertTrue(self.store.delete_camera(1))
        self.assertEqual(self.store.create_camera(camera_fields()).id, 3)
        self.assertEqual([camera.id for camera in self.store.list_cameras()], [2, 3])

    def test_separate_stores_have_separate_sequences(self):
        other = MemoryInventoryStore()
        self.store.create_camera(camera_fields())
        self.assertEqual(other.create_camera(camera_fields()).id, 1)

    def test_delete_missing_camera_reports_false(self):
        self.store.create_camera(camera_fields())
        self.assertFalse(self.store.delete_camera(5))
        self.assertEqual(len(self.store.list_cameras()), 1)

    def test_update_camera_is_shallow_merge_without_clamp(self):
        camera = self.store.create_camera(camera_fields(total_units=2, available_units=2))
        updated = self.store.update_camera(camera.id, {"available_units": 9, "id": 50})
        self.assertEqual(updated.id, camera.id)
        self.assertEqual(updated.available_units, 9)
        self.assertEqual(updated.total_units, 2)
        self.assertEqual(updated.name, camera.name)
        self.assertIsNone(self.store.update_camera(99, {"name": "x"}))

    def test_returned_records_are_detached(self):
        camera = self.store.create_camera(camera_fields())
        camera.available_units = 100
        camera.specifications.append("tampered")
        stored = self.store.get_camera(camera.id)
        self.assertEqual(stored.available_units, 1)
        self.assertEqual(stored.specifications, ["4K Video Recording"])

    def test_create_rental_defaults_status_and_takes_units(self):
        camera = self.store.create_camera(camera_fields(total_units=5, available_units=4))
        rental = self.store.create_rental_request(rental_fields(camera.id, quantity=3))
        self.assertEqual(rental.status, "pending")
        self.assertIsInstance(rental.created_at, datetime)
        self.assertEqual(rental.created_at.utcoffset(), timezone.utc.utcoffset(None))
        self.assertEqual(self.store.get_camera(camera.id).available_units, 1)

    def test_create_rental_keeps_explicit_status(self):
        camera = self.store.create_camera(camera_fields())
        rental = self.store.create_rental_request(rental_fields(camera.id, status="approved"))
        self.assertEqual(rental.status, "approved")

    def test_create_rental_for_missing_camera_is_stored_without_adjustment(self):
        rental = self.store.create_rental_request(rental_fields(42))
        self.assertEqual(rental.id, 1)
        self.assertEqual(self.store.get_rental_request(1).camera_id, 42)

    def test_create_rental_with_insufficient_units_leaves_inventory(self):
        camera = self.store.create_camera(camera_fields(total_units=1, available_units=1))
        rental = self.store.create_rental_request(rental_fields(camera.id, quantity=2))
        self.assertEqual(rental.status, "pending")
        self.assertEqual(self.store.get_camera(camera.id).available_units, 1)

    def test_cancel_round_trip_scenario(self):
        camera = self.store.create_camera(camera_fields(total_units=1, available_units=1))
        rental = self.store.create_rental_request(rental_fields(camera.id))
        self.assertEqual(self.store.get_camera(camera.id).available_units, 0)

        self.store.update_rental_request_status(rental.id, "cancelled")
        self.assertEqual(self.store.get_camera(camera.id).available_units, 1)

        updated = self.store.update_rental_request_status(rental.id, "approved")
        self.assertEqual(updated.status, "approved")
        self.assertEqual(self.store.get_camera(camera.id).available_units, 0)

    def test_cancelled_to_cancelled_is_a_no_op(self):
        camera = self.store.create_camera(camera_fields(total_units=2, available_units=2))
        rental = self.store.create_rental_request(rental_fields(camera.id))
        self.store.update_rental_request_status(rental.id, "cancelled")
        self.store.update_rental_request_status(rental.id, "cancelled")
        self.assertEqual(self.store.get_camera(camera.id).available_units, 2)

    def test_active_transitions_do_not_touch_inventory(self):
        camera = self.store.create_camera(camera_fields(total_units=3, available_units=3))
        rental = self.store.create_rental_request(rental_fields(camera.id, quantity=2))
        for status in ("approved", "completed", "pending"):
            self.store.update_rental_request_status(rental.id, status)
            self.assertEqual(self.store.get_camera(camera.id).available_units, 1)

    def test_cancel_after_camera_deleted_only_updates_status(self):
        camera = self.store.create_camera(camera_fields())
        rental = self.store.create_rental_request(rental_fields(camera.id))
        self.store.delete_camera(camera.id)
        updated = self.store.update_rental_request_status(rental.id, "cancelled")
        self.assertEqual(updated.status, "cancelled")
        self.assertIsNone(self.store.get_camera(camera.id))

    def test_status_update_for_missing_rental(self):
        self.assertIsNone(self.store.update_rental_request_status(3, "approved"))
        self.assertIsNone(self.store.get_rental_request(3))

    def test_seed_sample_catalog(self):
        seeded = seed_sample_catalog(self.store)
        self.assertEqual([camera.id for camera in seeded], [1, 2, 3])
        self.assertEqual([camera.name for camera in self.store.list_cameras()], [c["name"] for c in SAMPLE_CATALOG])
        self.assertEqual(self.store.get_camera(3).available_units, 0)


if __name__ == "__main__":
    unittest.main()
