import unittest

from resume_schema.config import ResumeSchemaConfig
from resume_schema.migration import MigrationEngine, migrate, migrate_if_needed, needs_migration
from resume_schema.models import DynamicSection, ExtendedDocument, LegacyDocument, LegacySection, load_document
from resume_schema.registry import SchemaRegistry
from resume_schema.validator import validate_migrated_data

from tests.samples import legacy_resume_data


class TestNeedsMigration(unittest.TestCase):

    def test_plain_data(self):
        data = legacy_resume_data()
        self.assertTrue(needs_migration(data))
        data['schemaVersion'] = '1.0.0'
        self.assertFalse(needs_migration(data))

    def test_documents(self):
        registry = SchemaRegistry.create_default()
        legacy = LegacyDocument.from_dict(legacy_resume_data())

        self.assertTrue(needs_migration(legacy))
        self.assertFalse(needs_migration(migrate(legacy, registry)))


class TestMigrationEngine(unittest.TestCase):

    def setUp(self):
        self.registry = SchemaRegistry.create_default()
        self.engine = MigrationEngine(self.registry)
        self.legacy = LegacyDocument.from_dict(legacy_resume_data())
        self.migrated = self.engine.migrate(self.legacy)

    def test_document_level_fields(self):
        self.assertIsInstance(self.migrated, ExtendedDocument)
        self.assertEqual(self.migrated.schema_version, '1.0.0')
        self.assertEqual(self.migrated.metadata.ai_optimization_level, 'basic')
        self.assertTrue(self.migrated.metadata.last_ai_review)
        self.assertEqual(self.migrated.template_id, 'pro-classic')
        self.assertEqual(self.migrated.personal_details, self.legacy.personal_details)

    def test_section_order_and_identity_preserved(self):
        before = [(s.id, s.title, s.visible) for s in self.legacy.sections]
        after = [(s.id, s.title, s.visible) for s in self.migrated.sections]
        self.assertEqual(after, before)

    def test_recognized_sections_become_dynamic(self):
        kinds = [type(s).__name__ for s in self.migrated.sections]
        self.assertEqual(
            kinds,
            ['DynamicSection', 'DynamicSection', 'LegacySection', 'DynamicSection', 'DynamicSection'],
        )
        experience = self.migrated.get_section('experience_1')
        self.assertEqual(experience.schema_id, 'experience')
        self.assertFalse(experience.metadata.custom_title)
        self.assertFalse(experience.metadata.ai_optimized)

    def test_unknown_section_type_passes_through_unchanged(self):
        self.assertIs(self.migrated.sections[2], self.legacy.sections[2])
        self.assertEqual(self.migrated.sections[2].type, 'customWidget')

    def test_experience_items_projected(self):
        items = self.migrated.get_section('experience_1').items

        self.assertEqual([i.id for i in items], ['exp_1_1', 'exp_1_2'])
        self.assertEqual(items[0].schema_id, 'experience')
        self.assertEqual(items[0].data, {
            'jobTitle': 'Software Engineer',
            'company': 'Tech Solutions Inc.',
            'startDate': 'Jan 2020',
            'endDate': 'Present',
            'description': 'Built web applications.',
        })
        self.assertEqual(items[1].data['endDate'], '')
        self.assertEqual(items[1].data['description'], '')
        self.assertFalse(items[0].metadata.ai_generated)

    def test_education_drops_unlisted_keys(self):
        data = self.migrated.get_section('education_1').items[0].data
        self.assertEqual(set(data), {'degree', 'institution', 'graduationYear', 'details'})

    def test_summary_and_skills_items(self):
        summary = self.migrated.get_section('summary_1').items[0]
        self.assertEqual(summary.id, 'summary_content_1')
        self.assertEqual(summary.data, {'content': 'Experienced software engineer...'})

        skills = self.migrated.get_section('skills_1').items
        self.assertEqual([i.data for i in skills], [{'name': 'Python'}, {'name': 'SQL'}])

    def test_source_items_are_not_shared(self):
        item = self.migrated.get_section('experience_1').items[0]
        item.data['jobTitle'] = 'Changed'
        self.assertEqual(self.legacy.sections[1].items[0]['jobTitle'], 'Software Engineer')

    def test_custom_text_section(self):
        legacy = LegacyDocument.from_dict({
            'personalDetails': {'fullName': 'A'},
            'sections': [{
                'id': 'c1', 'title': 'Hobbies', 'type': 'customText', 'visible': True,
                'isList': False, 'items': [{'id': 'c1_1', 'content': 'Chess'}],
            }],
        })
        section = self.engine.migrate(legacy).sections[0]
        self.assertIsInstance(section, DynamicSection)
        self.assertEqual(section.items[0].data, {'content': 'Chess'})

    def test_registered_non_legacy_type_passes_through(self):
        section = LegacySection(id='p1', title='Projects', type='projects', items=[{'id': 'x'}])
        legacy = LegacyDocument(personal_details=self.legacy.personal_details, sections=[section])
        self.assertIs(self.engine.migrate(legacy).sections[0], section)

    def test_empty_document(self):
        legacy = LegacyDocument.from_dict({})
        migrated = self.engine.migrate(legacy)
        self.assertEqual(migrated.sections, [])
        self.assertEqual(migrated.template_id, 'default')
        self.assertTrue(validate_migrated_data(legacy, migrated))

    def test_config_controls_version_marker(self):
        config = ResumeSchemaConfig(schema_version='1.1.0', default_optimization_level='advanced')
        migrated = migrate(self.legacy, self.registry, config)
        self.assertEqual(migrated.schema_version, '1.1.0')
        self.assertEqual(migrated.metadata.ai_optimization_level, 'advanced')


class TestMigrateIfNeeded(unittest.TestCase):

    def setUp(self):
        self.registry = SchemaRegistry.create_default()

    def test_idempotent(self):
        once = migrate_if_needed(LegacyDocument.from_dict(legacy_resume_data()), self.registry)
        twice = migrate_if_needed(once, self.registry)
        self.assertIs(twice, once)

    def test_migrate_data_from_persisted_form(self):
        engine = MigrationEngine(self.registry)

        migrated = engine.migrate_data(legacy_resume_data())
        self.assertEqual(len(migrated.get_dynamic_sections()), 4)

        reloaded = engine.migrate_data(migrated.to_dict())
        self.assertEqual(reloaded.to_dict(), migrated.to_dict())

    def test_null_schema_version_counts_as_versioned(self):
        data = {
            'personalDetails': {'fullName': 'Jane'},
            'schemaVersion': None,
            'sections': [{
                'id': 's1', 'schemaId': 'summary', 'title': 'Summary', 'visible': True,
                'items': [{'id': 'i1', 'data': {'content': 'Hello'}}],
            }],
        }
        document = load_document(data)

        self.assertFalse(needs_migration(data))
        self.assertFalse(needs_migration(document))

        migrated = MigrationEngine(self.registry).migrate_data(data)
        self.assertIsInstance(migrated, ExtendedDocument)
        self.assertEqual(migrated.sections[0].items[0].data, {'content': 'Hello'})

    def test_custom_projectors(self):
        engine = MigrationEngine(self.registry, projectors={})
        migrated = engine.migrate(LegacyDocument.from_dict(legacy_resume_data()))
        data = migrated.get_section('education_1').items[0].data
        self.assertEqual(data['gpa'], '3.9')
        self.assertNotIn('id', data)


if __name__ == '__main__':
    unittest.main()
