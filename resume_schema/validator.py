# resume_schema/validator.py
import logging
from typing import Optional, Tuple

from resume_schema.models import ExtendedDocument, LegacyDocument

logger = logging.getLogger(__name__)


class MigrationValidator:
    """Structural equivalence check between a legacy document and its migration"""

    def check(self, original: LegacyDocument, migrated: ExtendedDocument) -> Tuple[bool, Optional[str]]:
        """
        Compare the migrated document against its source

        Stops at the first mismatch. Item data is not compared.

        Returns:
            Tuple of (is_valid, first issue found or None)
        """
        try:
            return self._check(original, migrated)
        except Exception as e:
            logger.error(f"Validation error: {e}")
            return False, f"Validation error: {e}"

    def validate(self, original: LegacyDocument, migrated: ExtendedDocument) -> bool:
        is_valid, issue = self.check(original, migrated)
        if not is_valid:
            logger.warning(f"Migrated document failed validation: {issue}")
        return is_valid

    def _check(self, original: LegacyDocument, migrated: ExtendedDocument) -> Tuple[bool, Optional[str]]:
        if not migrated.schema_version:
            return False, "Missing schemaVersion"

        if len(migrated.sections) != len(original.sections):
            return False, (
                f"Section count differs: {len(original.sections)} -> {len(migrated.sections)}"
            )

        if migrated.template_id != original.template_id:
            return False, f"templateId differs: {original.template_id!r} -> {migrated.template_id!r}"

        original_details = original.personal_details.to_dict()
        migrated_details = migrated.personal_details.to_dict()
        for key, value in original_details.items():
            if migrated_details.get(key) != value:
                return False, f"personalDetails.{key} differs"

        for index, (before, after) in enumerate(zip(original.sections, migrated.sections)):
            for attr in ('id', 'title', 'visible'):
                if getattr(before, attr) != getattr(after, attr):
                    return False, f"Section[{index}] {attr} differs"

        return True, None

    def generate_report(self, original: LegacyDocument, migrated: ExtendedDocument) -> str:
        """Generate migration validation report"""
        is_valid, issue = self.check(original, migrated)
        dynamic = len(migrated.get_dynamic_sections())

        report = f"""
=== Migration Validation Report ===
Name: {original.personal_details.full_name}
Schema Version: {migrated.schema_version}
Sections: {len(original.sections)} -> {len(migrated.sections)}
Dynamic Sections: {dynamic}
Passed Through: {len(migrated.sections) - dynamic}

Status: {'VALID' if is_valid else 'INVALID'}
"""
        if issue:
            report += f"  - {issue}"
        return report


def validate_migrated_data(original: LegacyDocument, migrated: ExtendedDocument) -> bool:
    return MigrationValidator().validate(original, migrated)
