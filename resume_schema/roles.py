# resume_schema/roles.py
"""
Resolve semantic roles (title, organization, dates, ...) to item fields

Resolution order:
    1. The schema's role map, scanning the item's fields in stored order
    2. Conventional legacy key spellings for the role
    3. For ``other`` only: the first field no role map entry or legacy
       spelling claims

A miss at every stage is None (or an empty list), never an error.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from resume_schema.renderable import RenderableField, RenderableItem
from resume_schema.schema import FieldRole, RoleMap

logger = logging.getLogger(__name__)

# Conventional key spellings per role, used when no role map entry matches
LEGACY_FIELD_MAPPINGS: Dict[FieldRole, Tuple[str, ...]] = {
    FieldRole.TITLE: ('jobTitle', 'position', 'role', 'degree', 'name'),
    FieldRole.ORGANIZATION: ('company', 'employer', 'institution', 'school'),
    FieldRole.DESCRIPTION: ('description', 'summary', 'details', 'content', 'accomplishments'),
    FieldRole.START_DATE: ('startDate', 'from', 'start'),
    FieldRole.END_DATE: ('endDate', 'to', 'end'),
    FieldRole.LOCATION: ('location', 'address', 'city'),
    FieldRole.DATE_RANGE: ('dateRange', 'period', 'duration'),
    FieldRole.URL: ('url', 'link', 'website', 'portfolio'),
    FieldRole.SKILLS: ('skills', 'technologies', 'tools', 'languages'),
    FieldRole.LEVEL: ('level', 'proficiency', 'graduationYear'),
    FieldRole.IDENTIFIER: ('identifier', 'credentialId', 'certificateId'),
    FieldRole.OTHER: (),
}

ItemLike = Union[RenderableItem, Mapping[str, Any]]
RoleLike = Union[FieldRole, str]


def _fields_of(item: ItemLike) -> List[RenderableField]:
    if isinstance(item, RenderableItem):
        return item.fields
    if isinstance(item, Mapping):
        return RenderableItem.from_mapping(item).fields
    return []


def _claimed_keys(role_map: Optional[RoleMap]) -> set:
    """Keys claimed by any role other than ``other``"""
    claimed = set()
    if role_map:
        for key, mapped in role_map.field_mappings.items():
            # Multi-role entries count as claimed even when they include OTHER
            if mapped is not FieldRole.OTHER:
                claimed.add(key)
    # Every legacy spelling is claimed, whether or not its role matched this item
    for names in LEGACY_FIELD_MAPPINGS.values():
        claimed.update(names)
    return claimed


def pick_field_by_role(
    item: ItemLike,
    role: RoleLike,
    role_map: Optional[RoleMap] = None
) -> Optional[RenderableField]:
    """
    First field of the item carrying the given role

    Args:
        item: Renderable item, or a plain mapping of key -> value
        role: Role to look for
        role_map: Optional role map of the item's schema

    Returns:
        The matching field, or None
    """
    fields = _fields_of(item)
    resolved = FieldRole.coerce(role)
    if not fields or resolved is None:
        return None

    if role_map:
        for f in fields:
            if role_map.has_role(f.key, resolved):
                return f

    legacy_names = LEGACY_FIELD_MAPPINGS.get(resolved, ())
    for f in fields:
        if f.key in legacy_names:
            return f

    if resolved is FieldRole.OTHER:
        claimed = _claimed_keys(role_map)
        return next((f for f in fields if f.key not in claimed), None)

    return None


def pick_fields_by_role(
    item: ItemLike,
    role: RoleLike,
    role_map: Optional[RoleMap] = None
) -> List[RenderableField]:
    """All fields carrying the role; legacy spellings only when the role map yields none"""
    fields = _fields_of(item)
    resolved = FieldRole.coerce(role)
    if not fields or resolved is None:
        return []

    matches = []
    if role_map:
        matches = [f for f in fields if role_map.has_role(f.key, resolved)]

    if not matches:
        legacy_names = LEGACY_FIELD_MAPPINGS.get(resolved, ())
        matches = [f for f in fields if f.key in legacy_names]

    return matches


def field_text(f: Optional[RenderableField]) -> str:
    """Display text of a field value; empty when missing"""
    if f is None or f.value is None:
        return ''
    if isinstance(f.value, (list, tuple)):
        return ', '.join(str(v) for v in f.value)
    return str(f.value)


def get_item_title(item: ItemLike, role_map: Optional[RoleMap] = None) -> str:
    return field_text(pick_field_by_role(item, FieldRole.TITLE, role_map))


def get_item_organization(item: ItemLike, role_map: Optional[RoleMap] = None) -> str:
    return field_text(pick_field_by_role(item, FieldRole.ORGANIZATION, role_map))


def get_item_date_range(item: ItemLike, role_map: Optional[RoleMap] = None) -> str:
    """
    Date range of an item

    A combined date range field wins. Otherwise start and end dates are joined:
    "start - end", "start - Present", or the end date alone.
    """
    date_range = field_text(pick_field_by_role(item, FieldRole.DATE_RANGE, role_map))
    if date_range:
        return date_range

    start = field_text(pick_field_by_role(item, FieldRole.START_DATE, role_map))
    end = field_text(pick_field_by_role(item, FieldRole.END_DATE, role_map))

    if start and end:
        return f"{start} - {end}"
    if start:
        return f"{start} - Present"
    return end
