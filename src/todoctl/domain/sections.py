"""Standard body sections and their content schemas.

A section's schema is advisory: it tells outer surfaces how the content is
meant to be read (free text, checklist, test log ...).  It is stored in the
section metadata under :data:`SCHEMA_KEY` and omitted for ``freeform``.
"""

from __future__ import annotations

from enum import StrEnum

from todoctl.domain.todo import SectionDefinition

SCHEMA_KEY = "schema"


class SectionSchema(StrEnum):
    FREEFORM = "freeform"
    CHECKLIST = "checklist"
    TEST_CASES = "test_cases"
    RESULTS = "results"
    STRATEGY = "strategy"
    RESEARCH = "research"


STANDARD_SECTIONS: list[tuple[str, str, SectionSchema]] = [
    ("findings", "Findings & Research", SectionSchema.RESEARCH),
    ("web_searches", "Web Searches", SectionSchema.RESEARCH),
    ("test_strategy", "Test Strategy", SectionSchema.STRATEGY),
    ("test_list", "Test List", SectionSchema.CHECKLIST),
    ("tests", "Test Cases", SectionSchema.TEST_CASES),
    ("test_results", "Test Results Log", SectionSchema.RESULTS),
    ("checklist", "Checklist", SectionSchema.CHECKLIST),
    ("scratchpad", "Working Scratchpad", SectionSchema.FREEFORM),
]


def schema_of(section: SectionDefinition) -> str:
    return str(section.metadata.get(SCHEMA_KEY) or SectionSchema.FREEFORM)


def default_sections() -> dict[str, SectionDefinition]:
    """Fresh copies of the standard sections, ordered 1..N."""
    sections: dict[str, SectionDefinition] = {}
    for order, (key, title, schema) in enumerate(STANDARD_SECTIONS, start=1):
        metadata = {} if schema is SectionSchema.FREEFORM else {SCHEMA_KEY: schema.value}
        sections[key] = SectionDefinition(title=title, order=order, metadata=metadata)
    return sections
