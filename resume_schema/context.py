# resume_schema/context.py
"""
Context strings for text-generation requests

The text-generation service itself is an external collaborator; this module
only prepares the context it is sent. Builder failures never propagate: they
are logged and the affected part is left out.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from resume_schema.config import ResumeSchemaConfig
from resume_schema.exceptions import ContextBuildError
from resume_schema.models import DynamicSection, ExtendedDocument, Section
from resume_schema.registry import SchemaRegistry
from resume_schema.schema import SectionSchema
from resume_schema.utils import LRUCache, stable_hash

logger = logging.getLogger(__name__)

CURRENTLY_EDITING_TOKEN = '[[CURRENTLY_EDITING]]'


@dataclass
class StructuredAIContext:
    """Context handed to a text-generation request"""
    current_item_context: str = ''
    other_sections_context: str = ''
    user_job_title: Optional[str] = None
    user_job_info: Optional[str] = None
    user_bio: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'currentItemContext': self.current_item_context,
            'otherSectionsContext': self.other_sections_context,
            'userJobTitle': self.user_job_title,
            'userJobInfo': self.user_job_info,
            'userBio': self.user_bio,
        }


def _section_schema_id(section: Section) -> str:
    return section.schema_id if isinstance(section, DynamicSection) else section.type


class ContextComposer:
    """Builds context strings from registry-declared builders"""

    def __init__(self, registry: SchemaRegistry, config: Optional[ResumeSchemaConfig] = None):
        self.registry = registry
        self.config = config or ResumeSchemaConfig()
        self._other_sections_cache: LRUCache[str, str] = LRUCache(self.config.context_cache_capacity)

    def _safe_build(self, builder_id: Optional[str], data: Any, document: Any) -> str:
        if not builder_id:
            return ''
        try:
            return self.registry.build_context(builder_id, data, document)
        except ContextBuildError as e:
            logger.warning(f"Skipping context from builder '{e.builder_id}': {e.cause}")
            return ''

    def compose_field_context(
        self,
        section_type: Optional[str] = None,
        field_key: Optional[str] = None,
        item_data: Optional[Mapping[str, Any]] = None,
        document: Optional[ExtendedDocument] = None,
        current_item_context: Optional[str] = None
    ) -> str:
        """
        Single context string for editing one field of one item

        Args:
            section_type: Schema id of the section (or a raw legacy type)
            field_key: Field under edit
            item_data: Field values of the item under edit
            document: Whole document, for target role and builders
            current_item_context: Caller-supplied item context, used when
                no schema-declared builder produces one

        Returns:
            Newline-joined context; empty when nothing is known
        """
        parts: List[str] = []

        job_title = document.personal_details.job_title if document else ''
        if job_title:
            parts.append(f"Target role: {job_title}")

        schema: Optional[SectionSchema] = (
            self.registry.get_section_schema(section_type) if section_type else None
        )

        if schema:
            parts.append(f"Section: {schema.name} ({schema.id})")
        elif section_type:
            parts.append(f"Section type: {section_type}")

        if field_key:
            field = schema.get_field(field_key) if schema else None
            if field:
                parts.append(f"Field: {field.label} ({field.key})")
                prompts = field.ai_hints.improvement_prompts if field.ai_hints else ()
                if prompts:
                    parts.append(f"Improvement hints: {'; '.join(prompts)}")
            else:
                parts.append(f"Field: {field_key}")

        item_context = ''
        if schema and schema.ai_context and item_data is not None:
            item_context = self._safe_build(schema.ai_context.item_builder, dict(item_data), document)
        if not item_context and current_item_context:
            item_context = current_item_context
        if item_context:
            parts.append(f"Item context: {item_context}")

        return '\n'.join(parts)

    def build_ai_context(
        self,
        document: ExtendedDocument,
        task: str,
        section_id: str,
        field_id: str,
        item_id: Optional[str] = None,
        input_text: Optional[str] = None,
        ai_config: Optional[Mapping[str, Any]] = None
    ) -> StructuredAIContext:
        """
        Structured context for an improve or autocomplete request

        When ``input_text`` is given the field under edit is replaced by
        CURRENTLY_EDITING_TOKEN before the builder sees the item.
        """
        section = document.get_section(section_id)
        if section is None:
            logger.debug(f"Section not found for AI context: {section_id}")
            return StructuredAIContext()

        field = self.registry.get_field_schema(_section_schema_id(section), field_id)
        builder_id = field.ai_hints.context_builders.get(task) if field and field.ai_hints else None

        current_item_context = ''
        if builder_id:
            item_content = self._item_content(section, item_id)
            if item_content is not None and isinstance(input_text, str) and field_id:
                item_content = {**item_content, field_id: CURRENTLY_EDITING_TOKEN}
            if item_content is not None:
                current_item_context = self._safe_build(builder_id, item_content, document)

        ai_config = ai_config or {}
        return StructuredAIContext(
            current_item_context=current_item_context,
            other_sections_context=self.get_other_sections_context(document, section_id),
            user_job_title=document.personal_details.job_title,
            user_job_info=ai_config.get('targetJobInfo'),
            user_bio=ai_config.get('userBio'),
        )

    def _item_content(self, section: Section, item_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if isinstance(section, DynamicSection):
            item = section.get_item(item_id) if item_id else (section.items[0] if section.items else None)
            return dict(item.data) if item else None

        items = section.items
        if item_id:
            legacy_item = next((i for i in items if i.get('id') == item_id), None)
        else:
            legacy_item = items[0] if items else None
        return dict(legacy_item) if legacy_item is not None else None

    def get_other_sections_context(self, document: ExtendedDocument, section_id: str) -> str:
        """Summaries of every section except the one under edit, memoised by content"""
        relevant = document.to_dict()
        relevant['sections'] = [s for s in relevant['sections'] if s.get('id') != section_id]
        cache_key = f"other-sections:{stable_hash(relevant)}"

        cached = self._other_sections_cache.get(cache_key)
        if cached is not None:
            if self.config.debug_cache:
                logger.debug("[Cache Hit] Other sections context")
            return cached

        if self.config.debug_cache:
            logger.debug("[Cache Miss] Other sections context")

        parts = []
        for section in document.sections:
            if section.id == section_id:
                continue
            summary = self._section_summary(section, document)
            if summary:
                parts.append(summary)

        result = '\n\n'.join(parts)
        self._other_sections_cache.set(cache_key, result)
        return result

    def _section_summary(self, section: Section, document: ExtendedDocument) -> str:
        schema = self.registry.get_section_schema(_section_schema_id(section))
        if not schema or not schema.ai_context:
            return ''
        return self._safe_build(schema.ai_context.section_summary_builder, section.to_dict(), document)

    def stringify_resume_for_review(self, document: ExtendedDocument) -> str:
        """Whole-document text for a review request"""
        parts: List[str] = []

        ai_config = document.metadata.ai_config if document.metadata else {}
        if isinstance(ai_config.get('targetJobInfo'), str) and ai_config['targetJobInfo']:
            parts.append(f"## Target Job Description\n{ai_config['targetJobInfo']}")
        if isinstance(ai_config.get('userBio'), str) and ai_config['userBio']:
            parts.append(f"## User's Professional Bio\n{ai_config['userBio']}")

        details = document.personal_details
        personal_info = ' | '.join(
            f"{label}: {value}"
            for label, value in (('Job Title', details.job_title), ('Location', details.address))
            if value
        )
        if personal_info:
            parts.append(f"## Personal Information Summary\n{personal_info}")

        for section in document.sections:
            if not section.visible:
                continue
            summary = self._section_summary(section, document)
            if summary.strip():
                parts.append(summary)

        return self.config.review_section_separator.join(parts)

    def clear_cache(self):
        self._other_sections_cache.clear()
        self.registry.clear_context_cache()
        logger.debug("[Cache] All AI context caches cleared")
