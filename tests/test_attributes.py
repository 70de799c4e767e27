import unittest

from svrender.rendering.attributes import (
    ARIA_PREFIX,
    DATA_PREFIX,
    AttributeSet,
    normalize_name,
)


class TestNormalizeName(unittest.TestCase):
    def test_prefix_added_when_missing(self):
        self.assertEqual(normalize_name("role", DATA_PREFIX), "data-role")
        self.assertEqual(normalize_name("data-role", DATA_PREFIX), "data-role")
        self.assertEqual(normalize_name(" label ", ARIA_PREFIX), "aria-label")

    def test_blank_and_bare_prefix_ignored(self):
        for name in (None, "", "   ", "data-", "data", "DATA-"):
            self.assertIsNone(normalize_name(name, DATA_PREFIX), name)

    def test_unsafe_characters_rejected(self):
        for name in ('x"><script>', "has space", "a=b", "a/b", "it's", "tab\tname", "lt<"):
            self.assertIsNone(normalize_name(name, DATA_PREFIX), name)
        self.assertEqual(normalize_name("data-x_y.z:1", DATA_PREFIX), "data-x_y.z:1")


class TestAttributeSet(unittest.TestCase):
    def test_invalid_names_are_dropped(self):
        attrs = AttributeSet(DATA_PREFIX)
        attrs.set(None, "1")
        attrs.set("  ", "2")
        attrs.set("data-", "3")
        attrs.set('x"><script>', "4")
        attrs.set("has space", "5")
        self.assertEqual(len(attrs), 0)
        self.assertEqual(attrs.render(), "")

    def test_replace_keeps_position(self):
        attrs = AttributeSet()
        attrs.set("a", "1")
        attrs.set("b", "2")
        attrs.set("a", "3")
        self.assertEqual(attrs.items(), [("a", "3"), ("b", "2")])

    def test_schema_order_then_insertion_order(self):
        attrs = AttributeSet()
        attrs.set("z", "1")
        attrs.set("href", "/x")
        attrs.set("class", "c")
        self.assertEqual(
            attrs.render(order=("href", "class")), ' href="/x" class="c" z="1"'
        )

    def test_blank_value_is_valueless(self):
        attrs = AttributeSet()
        attrs.set("download", None)
        attrs.set("hidden", "  ")
        self.assertEqual(attrs.render(), " download hidden")

    def test_encoder_applied_to_values(self):
        attrs = AttributeSet()
        attrs.set("title", "a")
        self.assertEqual(attrs.render(encode=str.upper), ' title="A"')

    def test_set_prefixed(self):
        attrs = AttributeSet()
        attrs.set_prefixed(DATA_PREFIX, "id", "1")
        attrs.set_prefixed(ARIA_PREFIX, "aria-", "ignored")
        self.assertEqual(attrs.get("data-id"), "1")
        self.assertEqual(list(attrs), ["data-id"])

    def test_remove_and_copy(self):
        attrs = AttributeSet(ARIA_PREFIX)
        attrs.set("label", "x")
        dup = attrs.copy()
        attrs.remove("label")
        self.assertNotIn("aria-label", attrs)
        self.assertIn("aria-label", dup)
        self.assertNotEqual(attrs, dup)


if __name__ == "__main__":
    unittest.main()
