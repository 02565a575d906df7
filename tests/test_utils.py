import unittest

from resume_schema.utils import LRUCache, stable_hash


class TestLRUCache(unittest.TestCase):

    def test_capacity_plus_one_evicts_least_recently_used(self):
        cache = LRUCache(3)
        for key in ('a', 'b', 'c'):
            cache.set(key, key.upper())

        cache.set('d', 'D')

        self.assertIsNone(cache.get('a'))
        self.assertEqual(cache.get('b'), 'B')
        self.assertEqual(cache.get('d'), 'D')
        self.assertEqual(len(cache), 3)

    def test_get_refreshes_recency(self):
        cache = LRUCache(2)
        cache.set('a', 1)
        cache.set('b', 2)
        cache.get('a')

        cache.set('c', 3)

        self.assertIn('a', cache)
        self.assertNotIn('b', cache)

    def test_updating_existing_key_does_not_evict(self):
        cache = LRUCache(2)
        cache.set('a', 1)
        cache.set('b', 2)
        cache.set('a', 10)

        self.assertEqual(len(cache), 2)
        self.assertEqual(cache.get('a'), 10)
        self.assertEqual(cache.get('b'), 2)

    def test_clear(self):
        cache = LRUCache(2)
        cache.set('a', 1)
        cache.clear()
        self.assertEqual(len(cache), 0)
        self.assertIsNone(cache.get('a'))

    def test_rejects_non_positive_capacity(self):
        with self.assertRaises(ValueError):
            LRUCache(0)


class TestStableHash(unittest.TestCase):

    def test_key_order_does_not_matter(self):
        self.assertEqual(stable_hash({'a': 1, 'b': 2}), stable_hash({'b': 2, 'a': 1}))

    def test_nested_key_order_does_not_matter(self):
        first = {'outer': {'x': [1, {'p': True, 'q': None}], 'y': 'z'}}
        second = {'outer': {'y': 'z', 'x': [1, {'q': None, 'p': True}]}}
        self.assertEqual(stable_hash(first), stable_hash(second))

    def test_sequence_order_matters(self):
        self.assertNotEqual(stable_hash([1, 2]), stable_hash([2, 1]))

    def test_distinguishes_types(self):
        self.assertNotEqual(stable_hash({'a': 1}), stable_hash({'a': '1'}))
        self.assertEqual(stable_hash(None), 'null')

    def test_objects_hash_through_to_dict(self):
        class Point:
            def __init__(self, x, y):
                self.x, self.y = x, y

            def to_dict(self):
                return {'x': self.x, 'y': self.y}

        self.assertEqual(stable_hash(Point(1, 2)), stable_hash({'y': 2, 'x': 1}))


if __name__ == '__main__':
    unittest.main()
