from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from gedcom_codec.core.exceptions import ImportCommitError
from gedcom_codec.entities.models import (
    FAMILY_FACT_FIELDS,
    INDIVIDUAL_FACT_FIELDS,
    Issue,
    ParseResult,
    ValidationReport,
    entity_fields,
)
from gedcom_codec.exporter import GedcomWriter
from gedcom_codec.logging import get_logger
from gedcom_codec.parser_core import GedcomReader


@dataclass(slots=True)
class ImportSummary:
    people_created: int = 0
    families_created: int = 0
    warnings: List[Issue] = field(default_factory=list)

    # xref in the imported file -> id assigned by the data-access layer
    person_ids: Dict[str, str] = field(default_factory=dict)
    family_ids: Dict[str, str] = field(default_factory=dict)


class ImportPipeline:
    """
    Orchestrates a GEDCOM import into a DataAccess.
    No parsing or storage logic lives here.
    """

    def __init__(self, data_access, reader: GedcomReader | None = None):
        self.data_access = data_access
        self.reader = reader or GedcomReader()
        self.log = get_logger(__name__)

    def preview(self, text: str) -> ValidationReport:
        """Validate without persisting anything."""
        return self.reader.validate(text)

    def commit(self, text: str) -> ImportSummary:
        """
        Parse and persist every person, then every family, in one
        transaction.

        Raises:
            GedcomError: the text does not parse; nothing is written.
            ImportCommitError: the data-access layer rejected a write;
                everything written so far is rolled back.
        """
        result = self.reader.parse(text)
        self.log.info(
            "Import starting: %d individuals, %d families",
            len(result.individuals),
            len(result.families),
        )

        try:
            with self.data_access.transaction():
                summary = self._persist(result)
        except Exception as exc:
            self.log.exception("Import commit failed")
            raise ImportCommitError(str(exc)) from exc

        self.log.info(
            "Import completed: %d people, %d families",
            summary.people_created,
            summary.families_created,
        )
        return summary

    def _persist(self, result: ParseResult) -> ImportSummary:
        summary = ImportSummary(warnings=list(result.warnings))

        for person in result.individuals:
            person_id = self.data_access.create_person(
                entity_fields(person, INDIVIDUAL_FACT_FIELDS)
            )
            summary.person_ids[person.xref] = person_id
            summary.people_created += 1

        ids = summary.person_ids
        for family in result.families:
            values = entity_fields(family, FAMILY_FACT_FIELDS)
            values["husband"] = ids.get(family.husband) if family.husband else None
            values["wife"] = ids.get(family.wife) if family.wife else None
            values["children"] = [ids[c] for c in family.children]

            summary.family_ids[family.xref] = self.data_access.create_family(values)
            summary.families_created += 1

        return summary


class ExportPipeline:
    """Serializes everything held by a DataAccess, in creation order."""

    def __init__(self, data_access, writer: GedcomWriter | None = None):
        self.data_access = data_access
        self.writer = writer or GedcomWriter()
        self.log = get_logger(__name__)

    def run(self) -> str:
        persons = self.data_access.list_all_persons()
        families = self.data_access.list_all_families()
        self.log.info("Export starting: %d persons, %d families", len(persons), len(families))
        return self.writer.serialize(persons, families)
