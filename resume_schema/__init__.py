"""
Dynamic section schemas, legacy document migration and role mapping
"""

from resume_schema.config import ResumeSchemaConfig, Settings, get_config
from resume_schema.context import CURRENTLY_EDITING_TOKEN, ContextComposer, StructuredAIContext
from resume_schema.exceptions import ContextBuildError, ResumeSchemaError, SchemaDefinitionError
from resume_schema.migration import MigrationEngine, migrate, migrate_if_needed, needs_migration
from resume_schema.models import (
    DynamicSection,
    DynamicSectionItem,
    ExtendedDocument,
    LegacyDocument,
    LegacySection,
    PersonalDetails,
    load_document,
)
from resume_schema.registry import SchemaRegistry
from resume_schema.roles import (
    get_item_date_range,
    get_item_organization,
    get_item_title,
    pick_field_by_role,
    pick_fields_by_role,
)
from resume_schema.schema import FieldRole, FieldSchema, RoleMap, SectionSchema
from resume_schema.utils import LRUCache, stable_hash
from resume_schema.validator import MigrationValidator, validate_migrated_data

__version__ = "1.0.0"

__all__ = [
    'ResumeSchemaConfig',
    'Settings',
    'get_config',
    'CURRENTLY_EDITING_TOKEN',
    'ContextComposer',
    'StructuredAIContext',
    'ContextBuildError',
    'ResumeSchemaError',
    'SchemaDefinitionError',
    'MigrationEngine',
    'migrate',
    'migrate_if_needed',
    'needs_migration',
    'DynamicSection',
    'DynamicSectionItem',
    'ExtendedDocument',
    'LegacyDocument',
    'LegacySection',
    'PersonalDetails',
    'load_document',
    'SchemaRegistry',
    'get_item_date_range',
    'get_item_organization',
    'get_item_title',
    'pick_field_by_role',
    'pick_fields_by_role',
    'FieldRole',
    'FieldSchema',
    'RoleMap',
    'SectionSchema',
    'LRUCache',
    'stable_hash',
    'MigrationValidator',
    'validate_migrated_data',
]
