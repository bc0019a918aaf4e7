from __future__ import annotations

"""Read-only directory tables loaded from JSON at startup.

Three logically independent record sets:
- resources.json  -> ResourceOwnership
- schedules.json  -> WorkSchedule
- contacts.json   -> ContactProfile

Name lookups are case-insensitive substring matches. When several records
match, an exact (case-insensitive) name match wins, otherwise load order decides.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

from owner_agent.directory.models import ContactProfile, ResourceOwnership, WorkSchedule
from owner_agent.directory.seed import CONTACTS_FILE, RESOURCES_FILE, SCHEDULES_FILE, write_seed_file

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DirectoryLoadError(Exception):
    """Raised when a directory data file exists but cannot be parsed."""


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()


def match_by_name(records: Iterable[T], query: str, key: Callable[[T], str]) -> list[T]:
    """All records whose key contains query (case-insensitive), exact matches first.

    Order within each group is load order. A blank query matches nothing.
    """
    q = _norm(query)
    if not q:
        return []
    exact: list[T] = []
    partial: list[T] = []
    for r in records:
        name = _norm(key(r))
        if name == q:
            exact.append(r)
        elif q in name:
            partial.append(r)
    return exact + partial


@dataclass(frozen=True)
class DirectoryStore:
    resources: tuple[ResourceOwnership, ...] = ()
    schedules: tuple[WorkSchedule, ...] = ()
    contacts: tuple[ContactProfile, ...] = ()

    @classmethod
    def from_records(
        cls,
        *,
        resources: Iterable[dict[str, Any]] = (),
        schedules: Iterable[dict[str, Any]] = (),
        contacts: Iterable[dict[str, Any]] = (),
    ) -> "DirectoryStore":
        return cls(
            resources=tuple(ResourceOwnership.from_dict(r) for r in resources),
            schedules=tuple(WorkSchedule.from_dict(s) for s in schedules),
            contacts=tuple(ContactProfile.from_dict(c) for c in contacts),
        )

    # Ownership

    def find_resource(self, resource_type: str, resource_name: str) -> ResourceOwnership | None:
        t = _norm(resource_type)
        n = _norm(resource_name)
        if not n:
            return None
        typed = [r for r in self.resources if not t or _norm(r.resource_type) == t]
        for r in typed:
            if _norm(r.resource_name) == n:
                return r
        for r in typed:
            name = _norm(r.resource_name)
            if name and (name in n or n in name):
                return r
        return None

    def resources_owned_by(self, owner_name: str) -> list[ResourceOwnership]:
        q = _norm(owner_name)
        if not q:
            return []
        return [r for r in self.resources if q in _norm(r.owner.name)]

    def resources_for_team(self, team_name: str) -> list[ResourceOwnership]:
        q = _norm(team_name)
        if not q:
            return []
        return [r for r in self.resources if q in _norm(r.team)]

    # Schedules

    def find_schedules(self, person_name: str) -> list[WorkSchedule]:
        return match_by_name(self.schedules, person_name, lambda s: s.person_name)

    def find_schedule(self, person_name: str) -> WorkSchedule | None:
        matches = self.find_schedules(person_name)
        return matches[0] if matches else None

    def team_members(self, team_name: str) -> list[WorkSchedule]:
        q = _norm(team_name)
        if not q:
            return []
        return [s for s in self.schedules if q in _norm(s.team)]

    # Contact profiles

    def find_contact_profiles(self, person_name: str) -> list[ContactProfile]:
        return match_by_name(self.contacts, person_name, lambda c: c.person_name)

    def find_contact_profile(self, person_name: str) -> ContactProfile | None:
        matches = self.find_contact_profiles(person_name)
        return matches[0] if matches else None


def _read_table(path: Path, *, seed_missing: bool) -> list[dict[str, Any]]:
    if not path.exists():
        if not seed_missing:
            logger.warning("[directory] missing data file path=%s; table is empty", path)
            return []
        return write_seed_file(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DirectoryLoadError(f"Failed to read {path}: {e}") from e
    if not isinstance(data, list):
        raise DirectoryLoadError(f"Expected a JSON array in {path}")
    return data


def load_directory(data_dir: str | os.PathLike[str], *, seed_missing: bool = True) -> DirectoryStore:
    """Load the three directory tables from data_dir.

    Missing files are replaced by the example data set (and persisted) when
    seed_missing is set. Malformed files raise DirectoryLoadError.
    """
    root = Path(data_dir)
    resources = _read_table(root / RESOURCES_FILE, seed_missing=seed_missing)
    schedules = _read_table(root / SCHEDULES_FILE, seed_missing=seed_missing)
    contacts = _read_table(root / CONTACTS_FILE, seed_missing=seed_missing)
    try:
        store = DirectoryStore.from_records(resources=resources, schedules=schedules, contacts=contacts)
    except (TypeError, ValueError, AttributeError) as e:
        raise DirectoryLoadError(f"Invalid directory record in {root}: {e}") from e
    logger.info(
        "[directory] loaded resources=%d schedules=%d contacts=%d from %s",
        len(store.resources),
        len(store.schedules),
        len(store.contacts),
        root,
    )
    return store
