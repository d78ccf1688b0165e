"""
compare.py
Identity-free view of an entity graph.

Two graphs are equivalent when their facts match and their links connect
the same positions, whatever xrefs or storage ids they carry.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from gedcom_codec.entities.models import (
    FAMILY_FACT_FIELDS,
    INDIVIDUAL_FACT_FIELDS,
    Family,
    Individual,
    entity_fields,
)


def canonical_graph(individuals: Sequence[Individual], families: Sequence[Family]) -> Dict[str, Any]:
    """
    Replace every key with the position of the entity it names.

    Raises:
        KeyError: a link names an entity outside the given sequences.
    """
    person_pos = {p.key: i for i, p in enumerate(individuals)}
    family_pos = {f.key: i for i, f in enumerate(families)}

    people: List[Dict[str, Any]] = []
    for person in individuals:
        facts = entity_fields(person, INDIVIDUAL_FACT_FIELDS)
        facts["child_of_family"] = (
            family_pos[person.child_of_family] if person.child_of_family else None
        )
        facts["spouse_in_families"] = [family_pos[f] for f in person.spouse_in_families]
        people.append(facts)

    unions: List[Dict[str, Any]] = []
    for family in families:
        facts = entity_fields(family, FAMILY_FACT_FIELDS)
        facts["husband"] = person_pos[family.husband] if family.husband else None
        facts["wife"] = person_pos[family.wife] if family.wife else None
        facts["children"] = [person_pos[c] for c in family.children]
        unions.append(facts)

    return {"individuals": people, "families": unions}


def graph_differences(expected: Dict[str, Any], actual: Dict[str, Any]) -> List[str]:
    """Human-readable differences between two canonical graphs."""
    problems: List[str] = []
    for section in ("individuals", "families"):
        left, right = expected[section], actual[section]
        if len(left) != len(right):
            problems.append(f"{section}: {len(left)} before, {len(right)} after")
            continue
        for index, (a, b) in enumerate(zip(left, right)):
            for name in a:
                if a[name] != b.get(name):
                    problems.append(f"{section}[{index}].{name}: {a[name]!r} != {b.get(name)!r}")
    return problems
