# resume_schema/renderable.py
"""
Schema-aware views over item data

``TypedItemData`` wraps data whose schema is registered and only exposes the
declared field keys. ``OpaqueItemData`` wraps data of an unknown schema and
exposes it as-is. The ``Renderable*`` view models flatten documents into
ordered (key, label, value) fields, which is the shape the role resolver reads.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from resume_schema.models import DynamicSection, DynamicSectionItem, ExtendedDocument, PersonalDetails
from resume_schema.schema import SectionSchema

logger = logging.getLogger(__name__)


class OpaqueItemData(Mapping[str, Any]):
    """Item data with no registered schema; keys and values are passed through"""

    schema: Optional[SectionSchema] = None

    def __init__(self, data: Mapping[str, Any]):
        self._data = dict(data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def is_typed(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)


class TypedItemData(OpaqueItemData):
    """Item data validated against its section schema"""

    def __init__(self, data: Mapping[str, Any], schema: SectionSchema):
        declared = set(schema.field_keys)
        unknown = [key for key in data if key not in declared]
        if unknown:
            logger.debug(f"Ignoring undeclared keys for schema '{schema.id}': {unknown}")
        super().__init__({key: data[key] for key in schema.field_keys if key in data})
        self.schema = schema
        self.unknown_keys = unknown

    def __getitem__(self, key: str) -> Any:
        if self.schema.get_field(key) is None:
            raise KeyError(key)
        # Declared but unset fields read as empty
        return self._data.get(key, '')

    def __iter__(self) -> Iterator[str]:
        return iter(self.schema.field_keys)

    def __len__(self) -> int:
        return len(self.schema.fields)

    @property
    def is_typed(self) -> bool:
        return True


ItemData = Union[TypedItemData, OpaqueItemData]


def item_data_view(data: Mapping[str, Any], schema: Optional[SectionSchema]) -> ItemData:
    """Typed view when the schema is known, opaque bag otherwise"""
    if schema is None:
        return OpaqueItemData(data)
    return TypedItemData(data, schema)


@dataclass
class RenderableField:
    key: str
    label: str
    value: Any
    markdown_enabled: bool = False


@dataclass
class RenderableItem:
    id: str
    fields: List[RenderableField] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], item_id: str = '') -> "RenderableItem":
        """Fields in the mapping's own key order, labelled by key"""
        return cls(
            id=item_id,
            fields=[RenderableField(key=key, label=key, value=value) for key, value in data.items()],
        )


@dataclass
class RenderableSection:
    id: str
    title: str
    schema_id: str
    items: List[RenderableItem] = field(default_factory=list)
    default_render_type: Optional[str] = None


@dataclass
class RenderableResume:
    personal_details: PersonalDetails
    sections: List[RenderableSection] = field(default_factory=list)


def _has_value(value: Any) -> bool:
    if value is None or value == '':
        return False
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def to_renderable_item(item: DynamicSectionItem, schema: SectionSchema) -> RenderableItem:
    """Fields in schema order, skipping empty values"""
    fields = [
        RenderableField(
            key=f.key,
            label=f.label,
            value=item.data[f.key],
            markdown_enabled=f.markdown_enabled,
        )
        for f in schema.fields
        if _has_value(item.data.get(f.key))
    ]
    return RenderableItem(id=item.id, fields=fields)


def to_renderable_section(section: DynamicSection, registry) -> Optional[RenderableSection]:
    schema = registry.get_section_schema(section.schema_id)
    if schema is None:
        return None

    return RenderableSection(
        id=section.id,
        title=section.title,
        schema_id=section.schema_id,
        items=[to_renderable_item(item, schema) for item in section.items],
        default_render_type=schema.ui_config.get('defaultRenderType'),
    )


def transform_to_renderable_view(document: ExtendedDocument, registry) -> RenderableResume:
    """Visible, schema-known sections of a document as renderable view models"""
    sections = []
    for section in document.sections:
        if not section.visible:
            continue
        if not isinstance(section, DynamicSection):
            logger.debug(f"Skipping legacy section in renderable view: {section.id}")
            continue
        renderable = to_renderable_section(section, registry)
        if renderable is not None:
            sections.append(renderable)

    return RenderableResume(personal_details=document.personal_details, sections=sections)
