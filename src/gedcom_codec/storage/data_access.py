"""
data_access.py
Storage collaborator used by the import / export pipelines.

The pipelines only talk to the ``DataAccess`` protocol; ``InMemoryDataAccess``
is the reference implementation used by the CLI and the tests.
"""

from __future__ import annotations

import copy
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol

from gedcom_codec.entities.models import (
    FAMILY_FACT_FIELDS,
    INDIVIDUAL_FACT_FIELDS,
    Family,
    Individual,
)
from gedcom_codec.identity import deterministic_uuid
from gedcom_codec.logging import get_logger

log = get_logger(__name__)

FAMILY_MEMBER_FIELDS = ("husband", "wife", "children")


class DataAccess(Protocol):
    """Persistence operations the pipelines depend on."""

    def create_person(self, fields: Mapping[str, Any]) -> str: ...

    def create_family(self, fields: Mapping[str, Any]) -> str: ...

    def find_person(self, person_id: str) -> Optional[Individual]: ...

    def find_family(self, family_id: str) -> Optional[Family]: ...

    def list_all_persons(self) -> List[Individual]: ...

    def list_all_families(self) -> List[Family]: ...

    def transaction(self): ...


class StorageError(Exception):
    """A write was rejected by the data-access layer."""


@dataclass
class _Store:
    persons: Dict[str, Individual] = field(default_factory=dict)
    families: Dict[str, Family] = field(default_factory=dict)
    sequence: int = 0


class InMemoryDataAccess:
    """
    Dict-backed DataAccess.

    - ids are deterministic: derived from a namespace and a creation counter
    - listings follow creation order
    - ``transaction()`` snapshots the store and restores it if the block raises
    - returned entities are copies; callers cannot mutate stored state
    """

    def __init__(self, namespace: str = "gedcom_codec"):
        self.namespace = namespace
        self._store = _Store()
        self._depth = 0

    # ---------------------------------------------------------
    # Writes
    # ---------------------------------------------------------
    def _next_id(self, kind: str) -> str:
        self._store.sequence += 1
        return deterministic_uuid(self.namespace, kind, self._store.sequence)

    def create_person(self, fields: Mapping[str, Any]) -> str:
        unknown = set(fields) - set(INDIVIDUAL_FACT_FIELDS)
        if unknown:
            raise StorageError(f"Unknown person fields: {sorted(unknown)}")

        person_id = self._next_id("person")
        self._store.persons[person_id] = Individual(person_id=person_id, **dict(fields))
        log.debug("created person %s", person_id)
        return person_id

    def create_family(self, fields: Mapping[str, Any]) -> str:
        allowed = set(FAMILY_FACT_FIELDS) | set(FAMILY_MEMBER_FIELDS)
        unknown = set(fields) - allowed
        if unknown:
            raise StorageError(f"Unknown family fields: {sorted(unknown)}")

        values = dict(fields)
        values["children"] = list(values.get("children") or [])
        members = [values.get("husband"), values.get("wife"), *values["children"]]
        missing = [m for m in members if m is not None and m not in self._store.persons]
        if missing:
            raise StorageError(f"Family refers to unknown persons: {missing}")

        family_id = self._next_id("family")
        family = Family(family_id=family_id, **values)
        self._store.families[family_id] = family

        for spouse in family.spouses:
            self._store.persons[spouse].spouse_in_families.append(family_id)
        for child in family.children:
            person = self._store.persons[child]
            if person.child_of_family is None:
                person.child_of_family = family_id

        log.debug("created family %s", family_id)
        return family_id

    # ---------------------------------------------------------
    # Reads
    # ---------------------------------------------------------
    def find_person(self, person_id: str) -> Optional[Individual]:
        person = self._store.persons.get(person_id)
        return _copy_entity(person) if person else None

    def find_family(self, family_id: str) -> Optional[Family]:
        family = self._store.families.get(family_id)
        return _copy_entity(family) if family else None

    def list_all_persons(self) -> List[Individual]:
        return [_copy_entity(p) for p in self._store.persons.values()]

    def list_all_families(self) -> List[Family]:
        return [_copy_entity(f) for f in self._store.families.values()]

    # ---------------------------------------------------------
    # Transactions
    # ---------------------------------------------------------
    @contextmanager
    def transaction(self) -> Iterator["InMemoryDataAccess"]:
        """Nested blocks join the outermost transaction."""
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        snapshot = copy.deepcopy(self._store)
        self._depth = 1
        try:
            yield self
        except BaseException:
            self._store = snapshot
            log.warning("transaction rolled back")
            raise
        finally:
            self._depth = 0


def _copy_entity(entity):
    if isinstance(entity, Individual):
        return replace(entity, spouse_in_families=list(entity.spouse_in_families))
    return replace(entity, children=list(entity.children))
