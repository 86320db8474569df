"""Post-deploy smoke checks executed from the app container."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from datetime import date

BASE_URL = "http://localhost:8000"


def request(
    path: str,
    *,
    method: str = "GET",
    expected: int = 200,
) -> bytes:
    request_obj = urllib.request.Request(
        f"{BASE_URL}{path}",
        method=method,
        headers={"Accept": "application/json"},
    )
    try:
        with urllib.request.urlopen(request_obj, timeout=30) as response:
            content = response.read()
            status = response.getcode()
    except urllib.error.HTTPError as exc:  # pragma: no cover - runtime smoke script
        body_text = exc.read().decode("utf-8", errors="ignore")
        raise RuntimeError(f"{method} {path} -> {exc.code}: {body_text}") from exc

    if status != expected:
        raise RuntimeError(f"{method} {path} -> {status}, expected {expected}")
    return content


def main() -> None:
    for endpoint in ["/health", "/ready", "/docs", "/metrics", "/api/v1/schedule"]:
        request(endpoint, expected=200)

    services = json.loads(request("/api/v1/services").decode("utf-8"))
    for service in services:
        staff = json.loads(request(f"/api/v1/services/{service['id']}/staff").decode("utf-8"))
        if not staff:
            continue
        today = date.today()
        request(
            "/api/v1/availability/days"
            f"?service_id={service['id']}&staff_id={staff[0]['staff_id']}"
            f"&year={today.year}&month={today.month}",
        )
        request(
            "/api/v1/availability"
            f"?service_id={service['id']}&staff_id={staff[0]['staff_id']}&date={today.isoformat()}",
        )
        break

    print("Smoke checks passed.")


if __name__ == "__main__":
    main()
