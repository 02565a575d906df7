"""
Static default schema set and context builders
"""
import logging
from pathlib import Path
from typing import List, Union

import yaml

from resume_schema.catalog.context_builders import DEFAULT_CONTEXT_BUILDERS
from resume_schema.exceptions import SchemaDefinitionError
from resume_schema.schema import SectionSchema

logger = logging.getLogger(__name__)

DEFAULT_SCHEMAS_FILE = Path(__file__).parent / 'default_schemas.yaml'


def load_schemas(path: Union[str, Path]) -> List[SectionSchema]:
    """Load section schemas from a YAML catalog file"""
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict) or not isinstance(data.get('schemas'), list):
        raise SchemaDefinitionError(f"Schema catalog {path} has no 'schemas' list")

    schemas = [SectionSchema.from_dict(entry) for entry in data['schemas']]
    logger.debug(f"Loaded {len(schemas)} schemas from {path}")
    return schemas


def load_default_schemas() -> List[SectionSchema]:
    return load_schemas(DEFAULT_SCHEMAS_FILE)


__all__ = [
    'DEFAULT_CONTEXT_BUILDERS',
    'DEFAULT_SCHEMAS_FILE',
    'load_default_schemas',
    'load_schemas',
]
