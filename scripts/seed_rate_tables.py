#!/usr/bin/env python3
"""Publish a YAML rate-table file into a running Predial backend.

Usage:
    # Start the backend first:
    uvicorn predial.web.app:create_app --factory --port 8080

    # Publish the bundled tables:
    python3 scripts/seed_rate_tables.py

    # Publish another file against a different host:
    python3 scripts/seed_rate_tables.py --file tables_2026.yml --base-url http://localhost:9000

The file is validated locally (bracket contiguity, monotonic depreciation)
before anything is sent, then every row goes through the normal
administrative endpoints. Publishing a row for an existing key supersedes it.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import httpx

# Ensure the project source is importable when running the script directly.
_project_root = Path(__file__).resolve().parent.parent
_src = _project_root / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from predial.core.errors import ConfigurationError  # noqa: E402
from predial.repositories.loader import load_rate_tables  # noqa: E402
from predial.repositories.memory import RateTableStore  # noqa: E402

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_FILE = _project_root / "config" / "rate_tables.yml"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def api(
    client: httpx.Client,
    method: str,
    path: str,
    *,
    json: dict | list | None = None,
) -> dict | list | None:
    """Make an API call and return parsed JSON, or None on failure."""
    resp = client.request(method, path, json=json)
    if resp.status_code >= 400:
        print(f"  FAILED {method} {path} -> {resp.status_code}: {resp.text[:200]}")
        return None
    return resp.json()


def section(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


# ---------------------------------------------------------------------------
# Publishing
# ---------------------------------------------------------------------------


def publish(client: httpx.Client, store: RateTableStore) -> int:
    """Send every table in the store. Returns the number of failed calls."""
    failures = 0

    section("UIT values")
    for uit in store.list_uit_values():
        ok = api(client, "PUT", "/api/rates/uit", json=uit.model_dump(mode="json"))
        failures += ok is None
        print(f"  {uit.year}: S/ {uit.amount}")

    section("Tax brackets")
    for year in store.list_bracket_years():
        brackets = store.get_tax_brackets(year)
        ok = api(
            client, "PUT", f"/api/rates/brackets/{year}",
            json=[b.model_dump(mode="json") for b in brackets],
        )
        failures += ok is None
        print(f"  {year}: {len(brackets)} brackets")

    section("Alcabala rates")
    for rate in store.list_alcabala_rates():
        ok = api(client, "PUT", "/api/rates/alcabala", json=rate.model_dump(mode="json"))
        failures += ok is None
        print(f"  {rate.year}: {rate.rate}%")

    section("Depreciation")
    entries = store.list_depreciation_entries()
    for entry in entries:
        ok = api(client, "PUT", "/api/rates/depreciation", json=entry.model_dump(mode="json"))
        failures += ok is None
    print(f"  {len(entries)} rows")

    section("Unit values")
    unit_values = store.list_unit_value_entries()
    if unit_values:
        ok = api(
            client, "PUT", "/api/rates/unit-values",
            json=[e.model_dump(mode="json") for e in unit_values],
        )
        failures += ok is None
    print(f"  {len(unit_values)} rows")

    return failures


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Publish rate tables into a running Predial backend"
    )
    parser.add_argument(
        "--file",
        default=str(DEFAULT_FILE),
        help=f"YAML rate-table file (default: {DEFAULT_FILE})",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Backend base URL (default: {DEFAULT_BASE_URL})",
    )
    args = parser.parse_args()

    try:
        store = load_rate_tables(args.file)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)

    print("Predial Rate Table Seeder")
    print(f"Source: {args.file}")
    print(f"Target: {args.base_url}")

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        try:
            health = api(client, "GET", "/api/health")
        except httpx.ConnectError:
            health = None
        if not health:
            print(f"\nERROR: Cannot reach {args.base_url}. Start the backend first:")
            print("  uvicorn predial.web.app:create_app --factory --port 8080")
            sys.exit(1)

        failures = publish(client, store)

    if failures:
        print(f"\n{failures} call(s) failed")
        sys.exit(1)
    print("\nDone.")


if __name__ == "__main__":
    main()
