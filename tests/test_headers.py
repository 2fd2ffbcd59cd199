import unittest

from exporter.errors import DuplicateAliasError
from exporter.headers import Aliased, NormalizedHeaders, Plain, header_entry, normalize_headers


class TestHeaderEntry(unittest.TestCase):
    def test_plain_string(self):
        self.assertEqual(header_entry("id"), Plain("id"))
        self.assertEqual(Plain("id").alias, "id")

    def test_name_alias_mapping(self):
        self.assertEqual(header_entry({"name": "id", "alias": "ID"}), Aliased("id", "ID"))

    def test_mapping_without_alias_uses_name(self):
        self.assertEqual(header_entry({"name": "id"}), Plain("id"))

    def test_pair(self):
        self.assertEqual(header_entry(("id", "ID")), Aliased("id", "ID"))

    def test_other_values_are_coerced(self):
        self.assertEqual(header_entry(42), Plain("42"))


class TestNormalizeHeaders(unittest.TestCase):
    def test_mixed_entries(self):
        spec = ["id", {"name": "title", "alias": "Title"}, ("price", "Price")]
        headers = normalize_headers(spec)
        self.assertEqual(headers.key_headers, ("id", "title", "price"))
        self.assertEqual(headers.alias_headers, ("id", "Title", "Price"))
        self.assertEqual(len(headers), len(spec))

    def test_index_alignment(self):
        spec = [{"name": "a", "alias": "A"}, "b", {"name": "c", "alias": "C"}]
        headers = normalize_headers(spec)
        for i, entry in enumerate(spec):
            name = entry["name"] if isinstance(entry, dict) else entry
            alias = entry["alias"] if isinstance(entry, dict) else entry
            self.assertEqual(headers.key_headers[i], name)
            self.assertEqual(headers.alias_headers[i], alias)

    def test_absent_or_not_a_list(self):
        for value in (None, "id", {"name": "id"}, 5):
            headers = normalize_headers(value)
            self.assertEqual(headers, NormalizedHeaders())
            self.assertFalse(headers)

    def test_empty_list(self):
        self.assertFalse(normalize_headers([]))

    def test_already_normalized_passes_through(self):
        headers = normalize_headers(["a"])
        self.assertIs(normalize_headers(headers), headers)

    def test_duplicate_alias_kept_by_default(self):
        headers = normalize_headers([{"name": "a", "alias": "X"}, {"name": "b", "alias": "X"}])
        self.assertEqual(headers.alias_headers, ("X", "X"))

    def test_duplicate_alias_can_fail(self):
        with self.assertRaises(DuplicateAliasError) as ctx:
            normalize_headers([{"name": "a", "alias": "X"}, {"name": "b", "alias": "X"}], fail_on_duplicate_alias=True)
        self.assertEqual(ctx.exception.alias, "X")

    def test_generator_input(self):
        headers = normalize_headers(h for h in ["a", "b"])
        self.assertEqual(headers.key_headers, ("a", "b"))


if __name__ == "__main__":
    unittest.main()
