# scripts/migrate_resume.py
#!/usr/bin/env python3
"""
CLI script to migrate a legacy resume document to the extended format
Usage:
    python scripts/migrate_resume.py --input resume.json --output migrated.json
    python scripts/migrate_resume.py --input resume.json --validate
    python scripts/migrate_resume.py --list-schemas
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from resume_schema.config import get_config, get_settings
from resume_schema.migration import MigrationEngine, needs_migration
from resume_schema.models import load_document
from resume_schema.registry import SchemaRegistry
from resume_schema.utils import setup_logging
from resume_schema.validator import MigrationValidator

logger = logging.getLogger(__name__)


def list_schemas(registry: SchemaRegistry):
    print("\n=== Registered Schemas ===")
    for schema in registry.get_all_section_schemas():
        legacy = "legacy" if schema.legacy else "dynamic"
        print(f"  {schema.id:<18} {schema.type.value:<7} {legacy:<8} {', '.join(schema.field_keys)}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Migrate legacy resume data')
    parser.add_argument(
        '--input',
        help='Input resume JSON file'
    )
    parser.add_argument(
        '--output',
        help='Output JSON file for the migrated document'
    )
    parser.add_argument(
        '--validate',
        action='store_true',
        help='Validate the migrated document against its source'
    )
    parser.add_argument(
        '--list-schemas',
        action='store_true',
        help='List registered section schemas'
    )
    parser.add_argument(
        '--log-level',
        help='Logging level (default from RESUME_SCHEMA_LOG_LEVEL)'
    )

    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    config = get_config(settings)
    registry = SchemaRegistry.create_default(config)

    if args.list_schemas:
        list_schemas(registry)
        if not args.input:
            return 0

    if not args.input:
        parser.error('--input is required unless --list-schemas is given')

    try:
        with open(args.input, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: Failed to read resume: {e}")
        return 1

    if not isinstance(data, dict):
        print(f"ERROR: Resume must be a JSON object, got {type(data).__name__}")
        return 1

    if not needs_migration(data):
        print(f"Already versioned (schemaVersion {data['schemaVersion']}), nothing to migrate")
        migrated = load_document(data)
        original = None
    else:
        original = load_document(data)
        migrated = MigrationEngine(registry, config).migrate(original)

        dynamic = len(migrated.get_dynamic_sections())
        print("✓ Migrated successfully")
        print(f"  Name: {migrated.personal_details.full_name}")
        print(f"  Sections: {len(migrated.sections)} ({dynamic} dynamic)")
        print(f"  Schema version: {migrated.schema_version}")

    if args.validate and original is not None:
        print("\n=== Validation ===")
        validator = MigrationValidator()
        print(validator.generate_report(original, migrated))
        if not validator.validate(original, migrated):
            return 1

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(migrated.to_dict(), f, indent=2)
        print(f"\n✓ Migrated data saved to: {args.output}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
