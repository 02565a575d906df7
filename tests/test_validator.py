import copy
import unittest

from resume_schema.migration import migrate
from resume_schema.models import ExtendedDocument, LegacyDocument
from resume_schema.registry import SchemaRegistry
from resume_schema.validator import MigrationValidator, validate_migrated_data

from tests.samples import legacy_resume_data


class TestMigrationValidator(unittest.TestCase):

    def setUp(self):
        self.validator = MigrationValidator()
        self.legacy = LegacyDocument.from_dict(legacy_resume_data())
        self.migrated = migrate(self.legacy, SchemaRegistry.create_default())

    def test_migration_is_valid(self):
        self.assertTrue(validate_migrated_data(self.legacy, self.migrated))
        self.assertEqual(self.validator.check(self.legacy, self.migrated), (True, None))

    def test_missing_schema_version(self):
        self.migrated.schema_version = ''
        is_valid, issue = self.validator.check(self.legacy, self.migrated)
        self.assertFalse(is_valid)
        self.assertIn('schemaVersion', issue)

    def test_section_count(self):
        self.migrated.sections.pop()
        self.assertFalse(self.validator.validate(self.legacy, self.migrated))

    def test_template_id(self):
        self.migrated.template_id = 'modern'
        is_valid, issue = self.validator.check(self.legacy, self.migrated)
        self.assertFalse(is_valid)
        self.assertIn('templateId', issue)

    def test_personal_details(self):
        self.migrated.personal_details = copy.deepcopy(self.migrated.personal_details)
        self.migrated.personal_details.email = 'other@example.com'
        is_valid, issue = self.validator.check(self.legacy, self.migrated)
        self.assertFalse(is_valid)
        self.assertEqual(issue, 'personalDetails.email differs')

    def test_section_reordering(self):
        self.migrated.sections.reverse()
        is_valid, issue = self.validator.check(self.legacy, self.migrated)
        self.assertFalse(is_valid)
        self.assertEqual(issue, 'Section[0] id differs')

    def test_section_visibility(self):
        self.migrated.sections[0].visible = False
        self.assertFalse(self.validator.validate(self.legacy, self.migrated))

    def test_first_failure_is_reported(self):
        self.migrated.template_id = 'modern'
        self.migrated.sections.pop()
        _, issue = self.validator.check(self.legacy, self.migrated)
        self.assertTrue(issue.startswith('Section count differs'))

    def test_unexpected_input_is_invalid_not_raised(self):
        is_valid, issue = self.validator.check(self.legacy, None)
        self.assertFalse(is_valid)
        self.assertTrue(issue.startswith('Validation error'))

    def test_item_data_is_not_compared(self):
        self.migrated.get_section('experience_1').items[0].data['jobTitle'] = 'Edited'
        self.assertTrue(self.validator.validate(self.legacy, self.migrated))

    def test_report(self):
        report = self.validator.generate_report(self.legacy, self.migrated)
        self.assertIn('Status: VALID', report)
        self.assertIn('Dynamic Sections: 4', report)
        self.assertIn('Passed Through: 1', report)

        broken = ExtendedDocument(personal_details=self.legacy.personal_details, schema_version='1.0.0')
        self.assertIn('Status: INVALID', self.validator.generate_report(self.legacy, broken))


if __name__ == '__main__':
    unittest.main()
