"""Module entry point for python -m camera_rental."""

from __future__ import annotations

import os

import uvicorn


def main() -> int:
    port = int(os.environ.get("PORT") or "5000")
    host = os.environ.get("HOST") or "0.0.0.0"
    uvicorn.run("camera_rental.app:app", host=host, port=port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
