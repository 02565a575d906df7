# resume_schema/schema.py
"""
Section and field schema definitions

Schemas are frozen once built. Catalog files use the camelCase keys of the
persisted document format; ``from_dict`` accepts those and ``to_dict`` emits them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from resume_schema.exceptions import SchemaDefinitionError


class FieldRole(Enum):
    """Semantic role a field can carry, independent of its key spelling"""
    TITLE = "title"                 # Job title, position, role name
    ORGANIZATION = "organization"   # Company, institution, school
    DESCRIPTION = "description"     # Main content
    START_DATE = "startDate"
    END_DATE = "endDate"
    LOCATION = "location"
    DATE_RANGE = "dateRange"        # Combined date range
    URL = "url"
    SKILLS = "skills"
    LEVEL = "level"                 # Proficiency or education level
    IDENTIFIER = "identifier"       # Credential ID or code
    OTHER = "other"                 # Catch-all

    @classmethod
    def coerce(cls, value: Union["FieldRole", str, None]) -> Optional["FieldRole"]:
        """Return the matching role, or None for unknown values"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class SectionKind(Enum):
    SINGLE = "single"
    LIST = "list"


FIELD_TYPES = {
    'text', 'textarea', 'date', 'url', 'email', 'phone', 'select',
    'multiselect', 'combobox', 'object', 'array',
}

RoleMapping = Union[FieldRole, Tuple[FieldRole, ...]]


@dataclass(frozen=True)
class ValidationRule:
    type: str                       # required, minLength, maxLength, pattern, custom
    message: str
    value: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidationRule":
        return cls(type=data['type'], message=data.get('message', ''), value=data.get('value'))

    def to_dict(self) -> Dict[str, Any]:
        data = {'type': self.type, 'message': self.message}
        if self.value is not None:
            data['value'] = self.value
        return data


@dataclass(frozen=True)
class AIHints:
    """Hints for text-generation requests on a field"""
    context_builders: Dict[str, str] = field(default_factory=dict)  # task -> builder id
    improvement_prompts: Tuple[str, ...] = ()
    autocomplete_enabled: bool = False
    priority: Optional[str] = None  # high, medium, low

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AIHints":
        return cls(
            context_builders=dict(data.get('contextBuilders') or {}),
            improvement_prompts=tuple(data.get('improvementPrompts') or ()),
            autocomplete_enabled=bool(data.get('autocompleteEnabled', False)),
            priority=data.get('priority'),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'autocompleteEnabled': self.autocomplete_enabled}
        if self.context_builders:
            data['contextBuilders'] = dict(self.context_builders)
        if self.improvement_prompts:
            data['improvementPrompts'] = list(self.improvement_prompts)
        if self.priority:
            data['priority'] = self.priority
        return data


@dataclass(frozen=True)
class FieldSchema:
    """Single field within a section schema"""
    key: str
    label: str
    type: str = 'text'
    required: bool = False
    validation: Tuple[ValidationRule, ...] = ()
    ai_hints: Optional[AIHints] = None
    ui_props: Dict[str, Any] = field(default_factory=dict)

    @property
    def markdown_enabled(self) -> bool:
        return bool(self.ui_props.get('markdownEnabled', False))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldSchema":
        key = data.get('key') or data.get('id')
        if not key:
            raise SchemaDefinitionError(f"Field definition without key: {dict(data)}")

        field_type = data.get('type', 'text')
        if field_type not in FIELD_TYPES:
            raise SchemaDefinitionError(f"Field '{key}' has unknown type '{field_type}'")

        hints = data.get('aiHints')
        return cls(
            key=key,
            label=data.get('label', key),
            type=field_type,
            required=bool(data.get('required', False)),
            validation=tuple(ValidationRule.from_dict(v) for v in data.get('validation') or ()),
            ai_hints=AIHints.from_dict(hints) if hints else None,
            ui_props=dict(data.get('uiProps') or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'key': self.key,
            'label': self.label,
            'type': self.type,
            'required': self.required,
        }
        if self.validation:
            data['validation'] = [v.to_dict() for v in self.validation]
        if self.ai_hints:
            data['aiHints'] = self.ai_hints.to_dict()
        if self.ui_props:
            data['uiProps'] = dict(self.ui_props)
        return data


@dataclass(frozen=True)
class AIContextConfig:
    """Builder references used when composing text-generation context"""
    section_summary_builder: Optional[str] = None
    item_summary_builder: Optional[str] = None
    item_context_builder: Optional[str] = None
    batch_improvement_supported: bool = False

    @property
    def item_builder(self) -> Optional[str]:
        """Builder for a single item; the older item context key is still honoured"""
        return self.item_context_builder or self.item_summary_builder

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AIContextConfig":
        return cls(
            section_summary_builder=data.get('sectionSummaryBuilder'),
            item_summary_builder=data.get('itemSummaryBuilder'),
            item_context_builder=data.get('itemContextBuilder'),
            batch_improvement_supported=bool(data.get('batchImprovementSupported', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'batchImprovementSupported': self.batch_improvement_supported}
        for key, value in (
            ('sectionSummaryBuilder', self.section_summary_builder),
            ('itemSummaryBuilder', self.item_summary_builder),
            ('itemContextBuilder', self.item_context_builder),
        ):
            if value:
                data[key] = value
        return data


@dataclass(frozen=True)
class RoleMap:
    """Declares which field keys of a schema carry which semantic roles"""
    schema_id: str
    field_mappings: Dict[str, RoleMapping] = field(default_factory=dict)
    schema_version: str = "1.0.0"
    inferred_at: Optional[str] = None

    def roles_for(self, key: str) -> Tuple[FieldRole, ...]:
        mapped = self.field_mappings.get(key)
        if mapped is None:
            return ()
        if isinstance(mapped, FieldRole):
            return (mapped,)
        return tuple(mapped)

    def has_role(self, key: str, role: FieldRole) -> bool:
        return role in self.roles_for(key)

    @classmethod
    def from_dict(cls, schema_id: str, data: Mapping[str, Any]) -> "RoleMap":
        mappings = data.get('fieldMappings') or {}
        parsed: Dict[str, RoleMapping] = {}

        for key, value in mappings.items():
            values = value if isinstance(value, (list, tuple)) else [value]
            roles = []
            for raw in values:
                role = FieldRole.coerce(raw)
                if role is None:
                    raise SchemaDefinitionError(
                        f"Role map for '{schema_id}' maps '{key}' to unknown role '{raw}'"
                    )
                roles.append(role)
            parsed[key] = roles[0] if not isinstance(value, (list, tuple)) else tuple(roles)

        return cls(
            schema_id=schema_id,
            field_mappings=parsed,
            schema_version=str(data.get('schemaVersion', '1.0.0')),
            inferred_at=data.get('inferredAt'),
        )

    def to_dict(self) -> Dict[str, Any]:
        mappings: Dict[str, Any] = {}
        for key, value in self.field_mappings.items():
            if isinstance(value, FieldRole):
                mappings[key] = value.value
            else:
                mappings[key] = [role.value for role in value]
        data = {
            'schemaId': self.schema_id,
            'schemaVersion': self.schema_version,
            'fieldMappings': mappings,
        }
        if self.inferred_at:
            data['inferredAt'] = self.inferred_at
        return data


@dataclass(frozen=True)
class SectionSchema:
    """Registry entry describing the fields of a section"""
    id: str
    name: str
    type: SectionKind
    fields: Tuple[FieldSchema, ...]
    ui_config: Dict[str, Any] = field(default_factory=dict)
    ai_context: Optional[AIContextConfig] = None
    role_map: Optional[RoleMap] = None
    legacy: bool = False            # Equivalent of a built-in legacy section type

    @property
    def is_list(self) -> bool:
        return self.type is SectionKind.LIST

    @property
    def field_keys(self) -> List[str]:
        return [f.key for f in self.fields]

    def get_field(self, key: str) -> Optional[FieldSchema]:
        return next((f for f in self.fields if f.key == key), None)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SectionSchema":
        schema_id = data.get('id')
        if not schema_id:
            raise SchemaDefinitionError(f"Section schema without id: {dict(data)}")

        try:
            kind = SectionKind(data.get('type', 'list'))
        except ValueError:
            raise SchemaDefinitionError(
                f"Section schema '{schema_id}' has unknown type '{data.get('type')}'"
            )

        fields = tuple(FieldSchema.from_dict(f) for f in data.get('fields') or ())
        keys = [f.key for f in fields]
        if len(keys) != len(set(keys)):
            raise SchemaDefinitionError(f"Section schema '{schema_id}' declares duplicate field keys")

        ai_context = data.get('aiContext')
        role_map = data.get('roleMap')
        return cls(
            id=schema_id,
            name=data.get('name', schema_id),
            type=kind,
            fields=fields,
            ui_config=dict(data.get('uiConfig') or {}),
            ai_context=AIContextConfig.from_dict(ai_context) if ai_context else None,
            role_map=RoleMap.from_dict(schema_id, role_map) if role_map else None,
            legacy=bool(data.get('legacy', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'name': self.name,
            'type': self.type.value,
            'fields': [f.to_dict() for f in self.fields],
        }
        if self.ui_config:
            data['uiConfig'] = dict(self.ui_config)
        if self.ai_context:
            data['aiContext'] = self.ai_context.to_dict()
        if self.role_map:
            data['roleMap'] = self.role_map.to_dict()
        if self.legacy:
            data['legacy'] = True
        return data

    def __repr__(self):
        return f"<SectionSchema: {self.id} | {len(self.fields)} fields>"
