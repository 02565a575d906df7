# resume_schema/registry.py
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from resume_schema.catalog import DEFAULT_CONTEXT_BUILDERS, load_default_schemas, load_schemas
from resume_schema.config import ResumeSchemaConfig
from resume_schema.exceptions import ContextBuildError
from resume_schema.schema import FieldSchema, RoleMap, SectionSchema
from resume_schema.utils import LRUCache, stable_hash

logger = logging.getLogger(__name__)

ContextBuilderFunction = Callable[[Any, Any], str]


class SchemaRegistry:
    """
    Catalog of section schemas and named context builders

    Built once by the application's composition root (see ``create_default``)
    and passed to the components that need it. Lookups never raise: a missing
    schema or field is returned as None.
    """

    def __init__(
        self,
        schemas: Iterable[SectionSchema] = (),
        context_builders: Optional[Mapping[str, ContextBuilderFunction]] = None,
        builder_cache_capacity: int = 200,
        debug_cache: bool = False
    ):
        self._schemas: Dict[str, SectionSchema] = {}
        self._builders: Dict[str, ContextBuilderFunction] = {}
        self._builder_cache: LRUCache[str, str] = LRUCache(builder_cache_capacity)
        self.debug_cache = debug_cache

        for schema in schemas:
            self.register_section_schema(schema)
        for builder_id, builder in (context_builders or {}).items():
            self.register_context_builder(builder_id, builder)

    @classmethod
    def create_default(cls, config: Optional[ResumeSchemaConfig] = None) -> "SchemaRegistry":
        """Registry holding the default catalog plus any configured extra catalogs"""
        config = config or ResumeSchemaConfig()

        registry = cls(
            schemas=load_default_schemas(),
            context_builders=DEFAULT_CONTEXT_BUILDERS,
            builder_cache_capacity=config.builder_cache_capacity,
            debug_cache=config.debug_cache,
        )
        for path in config.extra_schema_files:
            registry.load_catalog(path)

        logger.info(f"Schema registry initialized with {len(registry)} schemas")
        return registry

    # Registration

    def register_section_schema(self, schema: SectionSchema):
        if schema.id in self._schemas:
            logger.warning(f"Replacing registered section schema: {schema.id}")
        self._schemas[schema.id] = schema

    register = register_section_schema

    def register_context_builder(self, builder_id: str, builder: ContextBuilderFunction):
        self._builders[builder_id] = builder
        self._builder_cache.clear()

    def load_catalog(self, path: Union[str, Path]) -> List[SectionSchema]:
        """Register every schema found in a YAML catalog file"""
        schemas = load_schemas(path)
        for schema in schemas:
            self.register_section_schema(schema)
        logger.info(f"Registered {len(schemas)} schemas from {path}")
        return schemas

    # Lookups

    def get_section_schema(self, schema_id: str) -> Optional[SectionSchema]:
        return self._schemas.get(schema_id)

    def get_field_schema(self, schema_id: str, field_key: str) -> Optional[FieldSchema]:
        schema = self.get_section_schema(schema_id)
        return schema.get_field(field_key) if schema else None

    def get_all_section_schemas(self) -> List[SectionSchema]:
        """All schemas in registration order"""
        return list(self._schemas.values())

    def get_available_section_types(self) -> List[str]:
        return list(self._schemas.keys())

    def is_legacy_section_type(self, section_type: str) -> bool:
        """True if a schema exists for this legacy type and is flagged as its equivalent"""
        schema = self._schemas.get(section_type)
        return bool(schema and schema.legacy)

    def get_role_map(self, schema_id: str) -> Optional[RoleMap]:
        schema = self.get_section_schema(schema_id)
        return schema.role_map if schema else None

    def get_ai_enabled_fields(self, schema_id: str) -> List[FieldSchema]:
        schema = self.get_section_schema(schema_id)
        if not schema:
            return []
        return [f for f in schema.fields if f.ai_hints and f.ai_hints.autocomplete_enabled]

    def get_improvement_prompts(self, schema_id: str, field_key: str) -> List[str]:
        field = self.get_field_schema(schema_id, field_key)
        if not field or not field.ai_hints:
            return []
        return list(field.ai_hints.improvement_prompts)

    def supports_batch_improvement(self, schema_id: str) -> bool:
        schema = self.get_section_schema(schema_id)
        return bool(schema and schema.ai_context and schema.ai_context.batch_improvement_supported)

    def has_context_builder(self, builder_id: str) -> bool:
        return builder_id in self._builders

    # Context building

    def build_context(self, builder_id: str, data: Any, all_data: Any = None) -> str:
        """
        Run a named context builder

        Args:
            builder_id: Registered builder name
            data: Item field data or a section in dict form
            all_data: Whole document, for cross-section context

        Returns:
            Builder output, or "" when the builder is not registered

        Raises:
            ContextBuildError: if the builder itself raises
        """
        builder = self._builders.get(builder_id)
        if builder is None:
            logger.debug(f"No context builder registered for '{builder_id}'")
            return ''

        cache_key = f"{builder_id}:{stable_hash(data)}"
        cached = self._builder_cache.get(cache_key)
        if cached is not None:
            if self.debug_cache:
                logger.debug(f"[Cache Hit] Builder: {builder_id}")
            return cached

        if self.debug_cache:
            logger.debug(f"[Cache Miss] Builder: {builder_id}")

        try:
            result = builder(data, all_data)
            result = '' if result is None else str(result)
        except Exception as e:
            raise ContextBuildError(builder_id, e) from e

        self._builder_cache.set(cache_key, result)
        return result

    def clear_context_cache(self):
        self._builder_cache.clear()
        if self.debug_cache:
            logger.debug("[Cache] Builder cache cleared")

    def __contains__(self, schema_id: object) -> bool:
        return schema_id in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self):
        return f"<SchemaRegistry: {len(self._schemas)} schemas | {len(self._builders)} builders>"
