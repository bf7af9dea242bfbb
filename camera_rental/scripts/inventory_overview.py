#!/usr/bin/env python3
"""Inventory overview and integrity checks against a running Camera Rental API."""

from __future__ import annotations

import argparse
import json
import os
import sys
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Iterable

RENTAL_STATUSES = {"pending", "approved", "completed", "cancelled"}


class OverviewError(RuntimeError):
    pass


@dataclass
class CheckResult:
    name: str
    ok: bool
    detail: str


def _print_section(title: str) -> None:
    print(f"\n=== {title} ===")


def _fetch_json(base_url: str, path: str, timeout: float = 20) -> Any:
    request = urllib.request.Request(url=f"{base_url.rstrip('/')}{path}", method="GET")
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            if response.status != 200:
                raise OverviewError(f"{path} returned status {response.status}")
            return json.loads(response.read().decode("utf-8"))
    except urllib.error.HTTPError as exc:
        raise OverviewError(f"{path} HTTP error: {exc.code}") from exc
    except urllib.error.URLError as exc:
        raise OverviewError(f"{path} connection error: {exc.reason}") from exc
    except json.JSONDecodeError as exc:
        raise OverviewError(f"{path} returned invalid JSON") from exc


def run_integrity_checks(cameras: list[dict[str, Any]], rentals: list[dict[str, Any]]) -> list[CheckResult]:
    results: list[CheckResult] = []
    camera_ids = {camera.get("id") for camera in cameras}

    negative = [camera.get("id") for camera in cameras if int(camera.get("availableUnits") or 0) < 0]
    results.append(
        CheckResult(
            "availableUnits non-negative",
            not negative,
            "ok" if not negative else f"camera ids {negative}",
        )
    )

    over_stock = [
        camera.get("id")
        for camera in cameras
        if int(camera.get("availableUnits") or 0) > int(camera.get("totalUnits") or 0)
    ]
    results.append(
        CheckResult(
            "availableUnits <= totalUnits",
            not over_stock,
            "ok" if not over_stock else f"camera ids {over_stock}",
        )
    )

    dangling = [rental.get("id") for rental in rentals if rental.get("cameraId") not in camera_ids]
    results.append(
        CheckResult(
            "rentals reference existing cameras",
            not dangling,
            "ok" if not dangling else f"rental ids {dangling}",
        )
    )

    bad_status = [rental.get("id") for rental in rentals if rental.get("status") not in RENTAL_STATUSES]
    results.append(
        CheckResult(
            "rental statuses valid",
            not bad_status,
            "ok" if not bad_status else f"rental ids {bad_status}",
        )
    )
    return results


def summarize_holds(cameras: list[dict[str, Any]], rentals: list[dict[str, Any]]) -> list[dict[str, Any]]:
    held: dict[Any, int] = {}
    for rental in rentals:
        if rental.get("status") == "cancelled":
            continue
        key = rental.get("cameraId")
        held[key] = held.get(key, 0) + int(rental.get("quantity") or 0)

    rows = []
    for camera in cameras:
        rows.append(
            {
                "id": camera.get("id"),
                "name": camera.get("name"),
                "totalUnits": camera.get("totalUnits"),
                "availableUnits": camera.get("availableUnits"),
                "heldByRequests": held.get(camera.get("id"), 0),
            }
        )
    return rows


def _print_results(title: str, results: Iterable[CheckResult]) -> None:
    _print_section(title)
    for result in results:
        marker = "OK  " if result.ok else "FAIL"
        print(f"[{marker}] {result.name}: {result.detail}")


def _print_holds(rows: list[dict[str, Any]]) -> None:
    _print_section("Inventory")
    for row in rows:
        print(
            f"  - #{row['id']} {row['name']}: available={row['availableUnits']}/{row['totalUnits']} "
            f"held={row['heldByRequests']}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Camera Rental inventory overview")
    parser.add_argument("--base-url", default=os.environ.get("CAMERA_RENTAL_BASE_URL", "http://127.0.0.1:5000"))
    parser.add_argument("--timeout", type=float, default=20)
    args = parser.parse_args(argv)

    try:
        cameras = _fetch_json(args.base_url, "/api/cameras", args.timeout)
        rentals = _fetch_json(args.base_url, "/api/rentals", args.timeout)
    except OverviewError as exc:
        print(f"Could not reach API: {exc}")
        return 3

    results = run_integrity_checks(cameras, rentals)
    _print_results("Integrity Checks", results)
    _print_holds(summarize_holds(cameras, rentals))
    return 0 if all(result.ok for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
