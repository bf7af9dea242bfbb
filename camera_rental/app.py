import logging
import os
import time
from typing import Any

from fastapi import BackgroundTasks, Body, Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    pass

from camera_rental.schemas.cameras import CameraPatchDto, CreateCameraDto
from camera_rental.schemas.rentals import CreateRentalRequestDto, RentalStatusUpdateDto
from camera_rental.services.camera_service import (
    filter_cameras,
    list_categories,
    map_camera_field,
    serialize_camera,
)
from camera_rental.services.notification_service import dispatch_rental_notifications
from camera_rental.services.rental_service import (
    CameraNotFoundError,
    InsufficientUnitsError,
    calculate_total_price,
    check_availability,
    describe_rental,
    map_rental_field,
    serialize_rental_request,
)
from camera_rental.store.base import InventoryStore
from camera_rental.store.deps import get_inventory_store

API_LOGGER = logging.getLogger("camera_rental.api")


def _configure_logging() -> None:
    level_name = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
    logging.getLogger("camera_rental").setLevel(getattr(logging, level_name, logging.INFO))
    if not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


_configure_logging()

app = FastAPI(title="Camera Rental API")


def _parse_csv_env(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in str(raw).split(",") if item.strip()]


_CORS_ALLOW_ORIGINS = _parse_csv_env(
    "CORS_ALLOW_ORIGINS",
    "http://127.0.0.1,http://localhost,http://127.0.0.1:5000,http://localhost:5000",
)
_CORS_ALLOW_CREDENTIALS = str(os.environ.get("CORS_ALLOW_CREDENTIALS", "true")).strip().lower() in {"1", "true", "yes", "on"}
if "*" in _CORS_ALLOW_ORIGINS:
    # Browsers reject wildcard origins with credentials.
    _CORS_ALLOW_CREDENTIALS = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=_CORS_ALLOW_ORIGINS,
    allow_credentials=_CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        duration_ms = int((time.perf_counter() - started) * 1000)
        API_LOGGER.info("%s %s %s in %sms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.get("/healthz")
def healthcheck():
    return {"status": "ok"}


@app.get("/api/healthz")
def healthcheck_api(store: InventoryStore = Depends(get_inventory_store)):
    try:
        store.list_cameras()
    except Exception as exc:
        raise HTTPException(status_code=503, detail=f"store_unavailable: {exc}") from exc
    return {"status": "ok"}


@app.get("/api/cameras")
def get_cameras(
    category: str | None = Query(None),
    availability: str | None = Query(None),
    search: str | None = Query(None),
    store: InventoryStore = Depends(get_inventory_store),
):
    try:
        cameras = store.list_cameras()
    except Exception as exc:
        raise _internal_error("Failed to fetch cameras") from exc
    return [serialize_camera(camera) for camera in filter_cameras(cameras, category, availability, search)]


@app.get("/api/cameras/categories")
def get_camera_categories(store: InventoryStore = Depends(get_inventory_store)):
    try:
        cameras = store.list_cameras()
    except Exception as exc:
        raise _internal_error("Failed to fetch categories") from exc
    return list_categories(cameras)


@app.get("/api/cameras/{camera_id}")
def get_camera(camera_id: str, store: InventoryStore = Depends(get_inventory_store)):
    parsed_id = _parse_id_or_400(camera_id, "Invalid camera ID")
    try:
        camera = store.get_camera(parsed_id)
    except Exception as exc:
        raise _internal_error("Failed to fetch camera") from exc
    if camera is None:
        raise HTTPException(status_code=404, detail="Camera not found")
    return serialize_camera(camera)


@app.post("/api/cameras", status_code=201)
def create_camera(payload: Any = Body(None), store: InventoryStore = Depends(get_inventory_store)):
    parsed = _validate_or_400(CreateCameraDto, payload)
    fields = {map_camera_field(field): value for field, value in parsed.model_dump().items()}
    try:
        camera = store.create_camera(fields)
    except Exception as exc:
        raise _internal_error("Failed to create camera") from exc
    API_LOGGER.info("Camera created camera_id=%s name=%r units=%s", camera.id, camera.name, camera.total_units)
    return serialize_camera(camera)


@app.put("/api/cameras/{camera_id}")
def update_camera(
    camera_id: str,
    payload: Any = Body(None),
    store: InventoryStore = Depends(get_inventory_store),
):
    parsed_id = _parse_id_or_400(camera_id, "Invalid camera ID")
    parsed = _validate_or_400(CameraPatchDto, payload)
    fields = {
        map_camera_field(field): value
        for field, value in parsed.model_dump(exclude_unset=True, exclude_none=True).items()
    }
    try:
        camera = store.update_camera(parsed_id, fields)
    except Exception as exc:
        raise _internal_error("Failed to update camera") from exc
    if camera is None:
        raise HTTPException(status_code=404, detail="Camera not found")
    return serialize_camera(camera)


@app.delete("/api/cameras/{camera_id}", status_code=204)
def delete_camera(camera_id: str, store: InventoryStore = Depends(get_inventory_store)):
    parsed_id = _parse_id_or_400(camera_id, "Invalid camera ID")
    try:
        deleted = store.delete_camera(parsed_id)
    except Exception as exc:
        raise _internal_error("Failed to delete camera") from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="Camera not found")
    API_LOGGER.info("Camera deleted camera_id=%s", parsed_id)
    return Response(status_code=204)


@app.get("/api/rentals")
def get_rentals(store: InventoryStore = Depends(get_inventory_store)):
    try:
        rentals = store.list_rental_requests()
    except Exception as exc:
        raise _internal_error("Failed to fetch rental requests") from exc
    return [serialize_rental_request(rental) for rental in rentals]


@app.get("/api/rentals/{rental_id}")
def get_rental(rental_id: str, store: InventoryStore = Depends(get_inventory_store)):
    parsed_id = _parse_id_or_400(rental_id, "Invalid rental ID")
    try:
        rental = store.get_rental_request(parsed_id)
    except Exception as exc:
        raise _internal_error("Failed to fetch rental request") from exc
    if rental is None:
        raise HTTPException(status_code=404, detail="Rental request not found")
    return serialize_rental_request(rental)


@app.post("/api/rentals", status_code=201)
def create_rental(
    background_tasks: BackgroundTasks,
    payload: Any = Body(None),
    store: InventoryStore = Depends(get_inventory_store),
):
    parsed = _validate_or_400(CreateRentalRequestDto, payload)
    try:
        camera = store.get_camera(parsed.cameraId)
    except Exception as exc:
        raise _internal_error("Failed to create rental request") from exc

    try:
        camera = check_availability(camera, parsed.cameraId, parsed.quantity)
    except CameraNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InsufficientUnitsError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    fields = {map_rental_field(field): value for field, value in parsed.model_dump().items()}
    try:
        rental = store.create_rental_request(fields)
    except Exception as exc:
        raise _internal_error("Failed to create rental request") from exc

    API_LOGGER.info("New rental request received rental_id=%s %s", rental.id, describe_rental(rental))
    expected_total = calculate_total_price(camera.price_per_day, rental.start_date, rental.end_date, rental.quantity)
    if abs(expected_total - rental.total_price) > 0.01:
        # totalPrice is stored as submitted.
        API_LOGGER.warning(
            "Total price mismatch rental_id=%s submitted=%.2f expected=%.2f",
            rental.id,
            rental.total_price,
            expected_total,
        )
    background_tasks.add_task(dispatch_rental_notifications, rental, camera)
    return serialize_rental_request(rental)


@app.put("/api/rentals/{rental_id}/status")
def update_rental_status(
    rental_id: str,
    payload: Any = Body(None),
    store: InventoryStore = Depends(get_inventory_store),
):
    parsed_id = _parse_id_or_400(rental_id, "Invalid rental ID")
    try:
        parsed = RentalStatusUpdateDto.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail="Invalid status") from exc

    try:
        rental = store.update_rental_request_status(parsed_id, parsed.status)
    except Exception as exc:
        raise _internal_error("Failed to update rental status") from exc
    if rental is None:
        raise HTTPException(status_code=404, detail="Rental request not found")
    API_LOGGER.info("Rental status updated rental_id=%s status=%s", rental.id, rental.status)
    return serialize_rental_request(rental)


def _parse_id_or_400(raw_value: str, detail: str) -> int:
    raw = str(raw_value).strip()
    if not raw or not (raw.isascii() and raw.isdigit()):
        raise HTTPException(status_code=400, detail=detail)
    return int(raw)


def _validate_or_400(model, payload: Any):
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=_format_validation_error(exc)) from exc


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Invalid value")
        parts.append(f'{message} at "{location}"' if location else message)
    return "Validation error: " + "; ".join(parts)


def _internal_error(detail: str) -> HTTPException:
    API_LOGGER.exception(detail)
    return HTTPException(status_code=500, detail=detail)
