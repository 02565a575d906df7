import unittest

from resume_schema.migration import migrate
from resume_schema.models import LegacyDocument
from resume_schema.registry import SchemaRegistry
from resume_schema.renderable import OpaqueItemData, TypedItemData, item_data_view, transform_to_renderable_view
from resume_schema.roles import get_item_date_range, get_item_title

from tests.samples import legacy_resume_data


class TestItemDataView(unittest.TestCase):

    def setUp(self):
        self.schema = SchemaRegistry.create_default().get_section_schema('experience')

    def test_typed_view(self):
        view = item_data_view({'jobTitle': 'Engineer', 'salary': 5}, self.schema)

        self.assertIsInstance(view, TypedItemData)
        self.assertTrue(view.is_typed)
        self.assertEqual(view['jobTitle'], 'Engineer')
        self.assertEqual(view['company'], '')
        self.assertEqual(list(view), self.schema.field_keys)
        self.assertEqual(view.unknown_keys, ['salary'])
        with self.assertRaises(KeyError):
            view['salary']

    def test_opaque_view(self):
        view = item_data_view({'label': 'Gadget', 'size': 3}, None)

        self.assertIsInstance(view, OpaqueItemData)
        self.assertFalse(view.is_typed)
        self.assertEqual(dict(view), {'label': 'Gadget', 'size': 3})


class TestRenderableView(unittest.TestCase):

    def setUp(self):
        self.registry = SchemaRegistry.create_default()
        document = migrate(LegacyDocument.from_dict(legacy_resume_data()), self.registry)
        self.view = transform_to_renderable_view(document, self.registry)

    def test_only_visible_dynamic_sections(self):
        self.assertEqual([s.id for s in self.view.sections], ['summary_1', 'experience_1', 'education_1', 'skills_1'])
        self.assertEqual(self.view.personal_details.full_name, 'John Doe')

    def test_fields_in_schema_order_without_empty_values(self):
        experience = self.view.sections[1]
        self.assertEqual(experience.default_render_type, 'timeline')

        first, second = experience.items
        self.assertEqual([f.key for f in first.fields], ['jobTitle', 'company', 'startDate', 'endDate', 'description'])
        self.assertEqual([f.key for f in second.fields], ['jobTitle', 'company', 'startDate'])
        self.assertEqual(first.fields[0].label, 'Job Title')
        self.assertTrue(first.fields[4].markdown_enabled)

    def test_role_accessors_on_renderable_items(self):
        role_map = self.registry.get_role_map('experience')
        first, second = self.view.sections[1].items

        self.assertEqual(get_item_title(first, role_map), 'Software Engineer')
        self.assertEqual(get_item_date_range(first, role_map), 'Jan 2020 - Present')
        self.assertEqual(get_item_date_range(second, role_map), 'Jun 2018 - Present')


if __name__ == '__main__':
    unittest.main()
