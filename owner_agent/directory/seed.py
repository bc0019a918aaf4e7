from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

RESOURCES_FILE = "resources.json"
SCHEDULES_FILE = "schedules.json"
CONTACTS_FILE = "contacts.json"

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]
_ALL_DAYS = _WEEKDAYS + ["saturday", "sunday"]


@dataclass(frozen=True)
class SeedConfig:
    """Which example tables to write and whether existing files are replaced."""

    overwrite: bool = False
    resources: bool = True
    schedules: bool = True
    contacts: bool = True


def _hours(start: str, end: str) -> dict[str, str]:
    return {"start": start, "end": end}


def _weekday_hours(start: str, end: str) -> dict[str, dict[str, str]]:
    return {day: _hours(start, end) for day in _WEEKDAYS}


def make_resources() -> list[dict]:
    return [
        {
            "type": "database",
            "name": "DB001",
            "description": "Main production database",
            "owner": {"name": "Jane Smith", "email": "jane.smith@example.com", "role": "Database Administrator"},
            "team": "Infrastructure",
            "backupOwners": [
                {"name": "John Doe", "email": "john.doe@example.com", "role": "Senior Database Administrator"},
            ],
        },
        {
            "type": "server",
            "name": "SRV001",
            "description": "Main web server",
            "owner": {"name": "John Doe", "email": "john.doe@example.com", "role": "System Administrator"},
            "team": "Infrastructure",
            "backupOwners": [
                {"name": "Jane Smith", "email": "jane.smith@example.com", "role": "Database Administrator"},
            ],
        },
        {
            "type": "application",
            "name": "APP001",
            "description": "Customer portal",
            "owner": {"name": "Bob Johnson", "email": "bob.johnson@example.com", "role": "Application Developer"},
            "team": "Development",
            "backupOwners": [
                {"name": "Alice Williams", "email": "alice.williams@example.com", "role": "Senior Developer"},
            ],
        },
    ]


def make_schedules() -> list[dict]:
    return [
        {
            "name": "Jane Smith",
            "email": "jane.smith@example.com",
            "timezone": "America/New_York",
            "team": "Infrastructure",
            "workHours": _weekday_hours("09:00", "17:00"),
            "vacations": [{"startDate": "2023-12-24", "endDate": "2024-01-02", "note": "Winter holiday"}],
            "sickLeave": None,
            "contact": {"slack": "@janesmith", "email": "jane.smith@example.com", "phone": "+1-555-123-4567"},
        },
        {
            "name": "John Doe",
            "email": "john.doe@example.com",
            "timezone": "Europe/London",
            "team": "Infrastructure",
            "workHours": _weekday_hours("08:00", "16:00"),
            "vacations": [],
            "sickLeave": None,
            "contact": {"slack": "@johndoe", "email": "john.doe@example.com", "phone": "+44-555-123-4567"},
        },
        {
            "name": "Bob Johnson",
            "email": "bob.johnson@example.com",
            "timezone": "America/Los_Angeles",
            "team": "Development",
            "workHours": _weekday_hours("10:00", "18:00"),
            "vacations": [],
            "sickLeave": None,
            "contact": {"slack": "@bobjohnson", "email": "bob.johnson@example.com", "phone": "+1-555-987-6543"},
        },
        {
            "name": "Alice Williams",
            "email": "alice.williams@example.com",
            "timezone": "America/Chicago",
            "team": "Development",
            "workHours": _weekday_hours("08:30", "16:30"),
            "vacations": [],
            "sickLeave": None,
            "contact": {"slack": "@alicew", "email": "alice.williams@example.com"},
        },
    ]


def make_contacts() -> list[dict]:
    return [
        {
            "name": "Jane Smith",
            "email": "jane.smith@example.com",
            "timezone": "America/New_York",
            "preferences": [
                {"method": "slack", "contact": "@janesmith", "priority": 1, "hours": _hours("09:00", "17:00"), "daysOfWeek": _WEEKDAYS},
                {"method": "email", "contact": "jane.smith@example.com", "priority": 2, "hours": _hours("00:00", "23:59"), "daysOfWeek": _ALL_DAYS},
                {"method": "phone", "contact": "+1-555-123-4567", "priority": 3, "hours": _hours("09:00", "17:00"), "daysOfWeek": _WEEKDAYS},
            ],
            "emergencyContact": {"method": "phone", "contact": "+1-555-123-4567"},
            "doNotDisturb": {"hours": _hours("22:00", "07:00"), "daysOfWeek": _ALL_DAYS},
        },
        {
            "name": "John Doe",
            "email": "john.doe@example.com",
            "timezone": "Europe/London",
            "preferences": [
                {"method": "email", "contact": "john.doe@example.com", "priority": 1, "hours": _hours("00:00", "23:59"), "daysOfWeek": _ALL_DAYS},
                {"method": "slack", "contact": "@johndoe", "priority": 2, "hours": _hours("08:00", "16:00"), "daysOfWeek": _WEEKDAYS},
                {"method": "phone", "contact": "+44-555-123-4567", "priority": 3, "hours": _hours("09:00", "16:00"), "daysOfWeek": _WEEKDAYS},
            ],
            "emergencyContact": {"method": "phone", "contact": "+44-555-123-4567"},
            "doNotDisturb": {"hours": _hours("21:00", "07:00"), "daysOfWeek": _ALL_DAYS},
        },
        {
            "name": "Bob Johnson",
            "email": "bob.johnson@example.com",
            "timezone": "America/Los_Angeles",
            "preferences": [
                {"method": "slack", "contact": "@bobjohnson", "priority": 1, "hours": _hours("10:00", "18:00"), "daysOfWeek": _WEEKDAYS},
                {"method": "email", "contact": "bob.johnson@example.com", "priority": 2, "hours": _hours("00:00", "23:59"), "daysOfWeek": _ALL_DAYS},
            ],
            "emergencyContact": {"method": "phone", "contact": "+1-555-987-6543"},
            "doNotDisturb": {"hours": _hours("20:00", "08:00"), "daysOfWeek": _ALL_DAYS},
        },
        {
            "name": "Alice Williams",
            "email": "alice.williams@example.com",
            "timezone": "America/Chicago",
            "preferences": [
                {"method": "slack", "contact": "@alicew", "priority": 1, "hours": _hours("08:30", "16:30"), "daysOfWeek": _WEEKDAYS},
                {"method": "email", "contact": "alice.williams@example.com", "priority": 2, "hours": _hours("00:00", "23:59"), "daysOfWeek": _ALL_DAYS},
            ],
            "emergencyContact": None,
            "doNotDisturb": None,
        },
    ]


SEED_TABLES = {
    RESOURCES_FILE: make_resources,
    SCHEDULES_FILE: make_schedules,
    CONTACTS_FILE: make_contacts,
}


def write_seed_file(path: Path) -> list[dict]:
    """Write the example records for one data file and return them."""
    records = SEED_TABLES[path.name]()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=2)
    logger.info("[seed] created example data path=%s records=%d", path, len(records))
    return records


def seed(data_dir: str | os.PathLike[str], *, cfg: SeedConfig | None = None) -> list[str]:
    """Write the example directory data set into data_dir. Returns the paths written."""

    cfg = cfg or SeedConfig()
    wanted = {
        RESOURCES_FILE: cfg.resources,
        SCHEDULES_FILE: cfg.schedules,
        CONTACTS_FILE: cfg.contacts,
    }
    written: list[str] = []
    for name, enabled in wanted.items():
        if not enabled:
            continue
        path = Path(data_dir) / name
        if path.exists() and not cfg.overwrite:
            logger.info("[seed] keeping existing path=%s", path)
            continue
        write_seed_file(path)
        written.append(str(path))
    return written


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Write the example directory data set.")
    ap.add_argument("--data-dir", default=os.getenv("DATA_DIR", "./data"))
    ap.add_argument("--overwrite", action="store_true", help="Replace existing files")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO)
    paths = seed(args.data_dir, cfg=SeedConfig(overwrite=args.overwrite))
    print(f"Seeded {len(paths)} file(s) in: {args.data_dir}")
