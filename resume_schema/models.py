# resume_schema/models.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# Wire key -> attribute name
_PERSONAL_FIELDS = {
    'fullName': 'full_name',
    'jobTitle': 'job_title',
    'email': 'email',
    'phone': 'phone',
    'address': 'address',
    'linkedin': 'linkedin',
    'github': 'github',
    'portfolio': 'portfolio',
    'avatar': 'avatar',
}


@dataclass
class PersonalDetails:
    """Contact and profile information"""
    full_name: str = ""
    job_title: str = ""             # Target role
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    avatar: str = ""                # Base64 image or URL
    extra: Dict[str, Any] = field(default_factory=dict)  # Dynamic personal fields

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PersonalDetails":
        data = data or {}
        known = {
            attr: '' if data.get(key) is None else data.get(key)
            for key, attr in _PERSONAL_FIELDS.items()
        }
        extra = {k: v for k, v in data.items() if k not in _PERSONAL_FIELDS}
        return cls(extra=extra, **known)

    def to_dict(self) -> Dict[str, Any]:
        data = {key: getattr(self, attr) for key, attr in _PERSONAL_FIELDS.items()}
        data.update(self.extra)
        return data


@dataclass
class LegacySection:
    """Fixed-shape section whose item layout is implied by its type"""
    id: str
    title: str
    type: str
    visible: bool = True
    is_list: bool = True
    items: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LegacySection":
        return cls(
            id=data.get('id', ''),
            title=data.get('title', ''),
            type=data.get('type', ''),
            visible=data.get('visible', True),
            is_list=data.get('isList', True),
            items=[dict(item) for item in data.get('items') or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'type': self.type,
            'visible': self.visible,
            'isList': self.is_list,
            'items': [dict(item) for item in self.items],
        }

    def __repr__(self):
        return f"<LegacySection: {self.id} ({self.type}) | {len(self.items)} items>"


@dataclass
class ItemMetadata:
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    ai_generated: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ItemMetadata":
        return cls(
            created_at=data.get('createdAt', ''),
            updated_at=data.get('updatedAt', ''),
            ai_generated=bool(data.get('aiGenerated', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
            'aiGenerated': self.ai_generated,
        }


@dataclass
class DynamicSectionItem:
    """Item whose field values are keyed by the field keys of its schema"""
    id: str
    schema_id: str
    data: Dict[str, Any] = field(default_factory=dict)
    metadata: Optional[ItemMetadata] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], schema_id: str = '') -> "DynamicSectionItem":
        metadata = data.get('metadata')
        return cls(
            id=data.get('id', ''),
            schema_id=data.get('schemaId', schema_id),
            data=dict(data.get('data') or {}),
            metadata=ItemMetadata.from_dict(metadata) if metadata else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'schemaId': self.schema_id,
            'data': dict(self.data),
        }
        if self.metadata:
            result['metadata'] = self.metadata.to_dict()
        return result


@dataclass
class SectionMetadata:
    custom_title: bool = False
    ai_optimized: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SectionMetadata":
        return cls(
            custom_title=bool(data.get('customTitle', False)),
            ai_optimized=bool(data.get('aiOptimized', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'customTitle': self.custom_title, 'aiOptimized': self.ai_optimized}


@dataclass
class DynamicSection:
    """Section referencing a registered section schema"""
    id: str
    schema_id: str
    title: str
    visible: bool = True
    items: List[DynamicSectionItem] = field(default_factory=list)
    metadata: Optional[SectionMetadata] = None

    def get_item(self, item_id: str) -> Optional[DynamicSectionItem]:
        return next((item for item in self.items if item.id == item_id), None)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DynamicSection":
        schema_id = data.get('schemaId', '')
        metadata = data.get('metadata')
        return cls(
            id=data.get('id', ''),
            schema_id=schema_id,
            title=data.get('title', ''),
            visible=data.get('visible', True),
            items=[DynamicSectionItem.from_dict(item, schema_id) for item in data.get('items') or []],
            metadata=SectionMetadata.from_dict(metadata) if metadata else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'schemaId': self.schema_id,
            'title': self.title,
            'visible': self.visible,
            'items': [item.to_dict() for item in self.items],
        }
        if self.metadata:
            result['metadata'] = self.metadata.to_dict()
        return result

    def __repr__(self):
        return f"<DynamicSection: {self.id} ({self.schema_id}) | {len(self.items)} items>"


Section = Union[DynamicSection, LegacySection]


def section_from_dict(data: Mapping[str, Any]) -> Section:
    """Dynamic when the section names a schema, legacy otherwise"""
    if 'schemaId' in data:
        return DynamicSection.from_dict(data)
    return LegacySection.from_dict(data)


@dataclass
class DocumentMetadata:
    last_ai_review: Optional[str] = None
    ai_optimization_level: str = "basic"    # basic, advanced, expert
    ai_config: Dict[str, Any] = field(default_factory=dict)  # targetJobInfo, userBio

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DocumentMetadata":
        return cls(
            last_ai_review=data.get('lastAIReview'),
            ai_optimization_level=data.get('aiOptimizationLevel', 'basic'),
            ai_config=dict(data.get('aiConfig') or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'aiOptimizationLevel': self.ai_optimization_level}
        if self.last_ai_review:
            data['lastAIReview'] = self.last_ai_review
        if self.ai_config:
            data['aiConfig'] = dict(self.ai_config)
        return data


@dataclass
class LegacyDocument:
    """Pre-dynamic document without a schema version marker"""
    personal_details: PersonalDetails
    sections: List[LegacySection] = field(default_factory=list)
    template_id: str = "default"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LegacyDocument":
        return cls(
            personal_details=PersonalDetails.from_dict(data.get('personalDetails')),
            sections=[LegacySection.from_dict(s) for s in data.get('sections') or []],
            template_id=data.get('templateId', 'default'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'personalDetails': self.personal_details.to_dict(),
            'sections': [s.to_dict() for s in self.sections],
            'templateId': self.template_id,
        }

    def __repr__(self):
        return f"<LegacyDocument: {self.personal_details.full_name} | {len(self.sections)} sections>"


@dataclass
class ExtendedDocument:
    """Versioned document whose sections may be dynamic or legacy pass-through"""
    personal_details: PersonalDetails
    sections: List[Section] = field(default_factory=list)
    template_id: str = "default"
    schema_version: str = "1.0.0"
    metadata: Optional[DocumentMetadata] = None

    def get_section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def get_dynamic_sections(self) -> List[DynamicSection]:
        return [s for s in self.sections if isinstance(s, DynamicSection)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtendedDocument":
        metadata = data.get('metadata')
        return cls(
            personal_details=PersonalDetails.from_dict(data.get('personalDetails')),
            sections=[section_from_dict(s) for s in data.get('sections') or []],
            template_id=data.get('templateId', 'default'),
            schema_version=data['schemaVersion'],
            metadata=DocumentMetadata.from_dict(metadata) if metadata else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'personalDetails': self.personal_details.to_dict(),
            'sections': [s.to_dict() for s in self.sections],
            'templateId': self.template_id,
            'schemaVersion': self.schema_version,
        }
        if self.metadata:
            data['metadata'] = self.metadata.to_dict()
        return data

    def __repr__(self):
        return (
            f"<ExtendedDocument v{self.schema_version}: {self.personal_details.full_name} "
            f"| {len(self.sections)} sections>"
        )


Document = Union[LegacyDocument, ExtendedDocument]


def load_document(data: Mapping[str, Any]) -> Document:
    """Build a document from its persisted form, keyed by the version marker"""
    if 'schemaVersion' in data:
        return ExtendedDocument.from_dict(data)
    return LegacyDocument.from_dict(data)
