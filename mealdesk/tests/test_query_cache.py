import unittest

from mealdesk.infra.Query_Cache import QueryCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestQueryCache(unittest.TestCase):

    def setUp(self):
        self.loads = 0

    def loader(self, value="fresh"):
        def load():
            self.loads += 1
            return value
        return load

    def test_second_read_is_served_from_cache(self):
        cache = QueryCache(ttl=0)
        self.assertEqual(cache.fetch(("recipes",), self.loader()), "fresh")
        self.assertEqual(cache.fetch(("recipes",), self.loader("other")), "fresh")
        self.assertEqual(self.loads, 1)
        self.assertIn(("recipes",), cache)

    def test_invalidate_by_prefix(self):
        cache = QueryCache(ttl=0)
        cache.fetch(("mealplans",), self.loader())
        cache.fetch(("mealplans", 1), self.loader())
        cache.fetch(("mealplans", 1, "recipes"), self.loader())
        cache.fetch(("mealplans", 2, "recipes"), self.loader())
        cache.fetch(("recipes",), self.loader())

        self.assertEqual(cache.invalidate("mealplans", 1), 2)
        self.assertNotIn(("mealplans", 1, "recipes"), cache)
        self.assertIn(("mealplans", 2, "recipes"), cache)
        self.assertEqual(cache.invalidate("mealplans"), 2)
        self.assertIn(("recipes",), cache)

    def test_entries_expire_after_ttl(self):
        clock = FakeClock()
        cache = QueryCache(ttl=30, clock=clock)
        cache.fetch(("users",), self.loader())
        clock.now = 29
        cache.fetch(("users",), self.loader())
        self.assertEqual(self.loads, 1)
        clock.now = 31
        cache.fetch(("users",), self.loader())
        self.assertEqual(self.loads, 2)

    def test_clear(self):
        cache = QueryCache(ttl=0)
        cache.fetch(("users",), self.loader())
        cache.clear()
        self.assertNotIn(("users",), cache)

    def test_failed_load_is_not_cached(self):
        cache = QueryCache(ttl=0)

        def boom():
            raise RuntimeError("backend down")

        with self.assertRaises(RuntimeError):
            cache.fetch(("users",), boom)
        self.assertNotIn(("users",), cache)

    def test_load_racing_an_invalidation_is_not_stored(self):
        cache = QueryCache(ttl=0)

        def load_then_write_lands():
            # a write finishes while the read is still in flight
            cache.invalidate("mealplans", 3, "recipes")
            return "old"

        self.assertEqual(cache.fetch(("mealplans", 3, "recipes"), load_then_write_lands), "old")
        self.assertNotIn(("mealplans", 3, "recipes"), cache)
        self.assertEqual(cache.fetch(("mealplans", 3, "recipes"), lambda: "new"), "new")

    def test_load_racing_a_clear_is_not_stored(self):
        cache = QueryCache(ttl=0)

        def load_then_sign_out():
            cache.clear()
            return "previous user"

        cache.fetch(("users",), load_then_sign_out)
        self.assertNotIn(("users",), cache)


if __name__ == '__main__':
    unittest.main()
