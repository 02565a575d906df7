# resume_schema/migration.py
"""
Migration of legacy (unversioned) documents to the extended format

Sections whose type has a legacy-equivalent schema become dynamic sections.
Every other section is passed through unchanged. Section order, ids, titles
and visibility are kept as they are.
"""
import copy
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from resume_schema.config import ResumeSchemaConfig
from resume_schema.models import (
    Document,
    DocumentMetadata,
    DynamicSection,
    DynamicSectionItem,
    ExtendedDocument,
    ItemMetadata,
    LegacyDocument,
    LegacySection,
    SectionMetadata,
    load_document,
    utc_now_iso,
)
from resume_schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)

ItemProjector = Callable[[Mapping[str, Any]], Dict[str, Any]]


def _fixed_fields(*keys: str) -> ItemProjector:
    """Projector keeping the given keys, missing or empty values read as ''"""
    def project(item: Mapping[str, Any]) -> Dict[str, Any]:
        return {key: copy.deepcopy(item.get(key)) or '' for key in keys}
    return project


def passthrough_projector(item: Mapping[str, Any]) -> Dict[str, Any]:
    """Every property except the item id, verbatim"""
    return {key: copy.deepcopy(value) for key, value in item.items() if key != 'id'}


# Legacy section type -> item projector
ITEM_PROJECTORS: Dict[str, ItemProjector] = {
    'experience': _fixed_fields('jobTitle', 'company', 'startDate', 'endDate', 'description'),
    'education': _fixed_fields('degree', 'institution', 'graduationYear', 'details'),
    'skills': _fixed_fields('name'),
    'summary': _fixed_fields('content'),
    'customText': _fixed_fields('content'),
}


def needs_migration(document: Union[Document, Mapping[str, Any]]) -> bool:
    """True if the document carries no schema version marker"""
    if isinstance(document, Mapping):
        return 'schemaVersion' not in document
    # A loaded extended document had the marker, even when its value is null
    return not isinstance(document, ExtendedDocument)


class MigrationEngine:
    """Converts legacy documents to extended documents"""

    def __init__(
        self,
        registry: SchemaRegistry,
        config: Optional[ResumeSchemaConfig] = None,
        projectors: Optional[Mapping[str, ItemProjector]] = None
    ):
        self.registry = registry
        self.config = config or ResumeSchemaConfig()
        self.projectors = dict(ITEM_PROJECTORS if projectors is None else projectors)

    def migrate(self, legacy: LegacyDocument) -> ExtendedDocument:
        """
        Migrate a legacy document

        Args:
            legacy: Document without a schema version

        Returns:
            Extended document with the same sections in the same order
        """
        logger.info("Migrating legacy resume data to extended format...")

        sections = [self._migrate_section(section) for section in legacy.sections]
        converted = sum(1 for s in sections if isinstance(s, DynamicSection))

        logger.info(
            f"Migrated {len(sections)} sections "
            f"({converted} dynamic, {len(sections) - converted} passed through)"
        )

        return ExtendedDocument(
            personal_details=copy.deepcopy(legacy.personal_details),
            sections=sections,
            template_id=legacy.template_id,
            schema_version=self.config.schema_version,
            metadata=DocumentMetadata(
                last_ai_review=utc_now_iso(),
                ai_optimization_level=self.config.default_optimization_level,
            ),
        )

    def migrate_if_needed(self, document: Document) -> ExtendedDocument:
        """Versioned documents are returned as they are"""
        if needs_migration(document):
            return self.migrate(document)
        return document

    def migrate_data(self, data: Mapping[str, Any]) -> ExtendedDocument:
        """Load a persisted document and migrate it when it is unversioned"""
        return self.migrate_if_needed(load_document(data))

    def _migrate_section(self, section: LegacySection):
        schema = self.registry.get_section_schema(section.type)

        if schema is None or not self.registry.is_legacy_section_type(section.type):
            logger.debug(f"Passing through section '{section.id}' of type '{section.type}'")
            return section

        project = self.projectors.get(section.type, passthrough_projector)
        return DynamicSection(
            id=section.id,
            schema_id=section.type,
            title=section.title,
            visible=section.visible,
            items=[self._migrate_item(item, section.type, project) for item in section.items],
            metadata=SectionMetadata(custom_title=False, ai_optimized=False),
        )

    def _migrate_item(self, item: Mapping[str, Any], schema_id: str, project: ItemProjector) -> DynamicSectionItem:
        now = utc_now_iso()
        return DynamicSectionItem(
            id=item.get('id', ''),
            schema_id=schema_id,
            data=project(item),
            metadata=ItemMetadata(created_at=now, updated_at=now, ai_generated=False),
        )


def migrate(
    legacy: LegacyDocument,
    registry: SchemaRegistry,
    config: Optional[ResumeSchemaConfig] = None
) -> ExtendedDocument:
    return MigrationEngine(registry, config).migrate(legacy)


def migrate_if_needed(
    document: Document,
    registry: SchemaRegistry,
    config: Optional[ResumeSchemaConfig] = None
) -> ExtendedDocument:
    return MigrationEngine(registry, config).migrate_if_needed(document)
