import unittest

from exporter.headers import normalize_headers
from exporter.reshape import to_keyed_records, to_rows

RECORDS = [{"id": 1, "name": "Ann", "age": 31}, {"id": 2, "name": "Bo"}]
HEADERS = [{"name": "id", "alias": "ID"}, {"name": "name", "alias": "Name"}, "age"]


class TestToRows(unittest.TestCase):
    def test_header_row_then_values(self):
        rows = to_rows(RECORDS, HEADERS)
        self.assertEqual(rows[0], ["ID", "Name", "age"])
        self.assertEqual(rows[1], [1, "Ann", 31])
        self.assertEqual(len(rows), len(RECORDS) + 1)

    def test_missing_key_is_none(self):
        rows = to_rows(RECORDS, HEADERS)
        self.assertEqual(rows[2], [2, "Bo", None])

    def test_accepts_normalized_headers(self):
        headers = normalize_headers(HEADERS)
        self.assertEqual(to_rows(RECORDS, headers)[0], list(headers.alias_headers))

    def test_no_records(self):
        self.assertEqual(to_rows([], ["a"]), [["a"]])


class TestToKeyedRecords(unittest.TestCase):
    def test_rekeyed_by_alias(self):
        out = to_keyed_records(RECORDS, HEADERS)
        self.assertEqual(out, [
            {"ID": 1, "Name": "Ann", "age": 31},
            {"ID": 2, "Name": "Bo", "age": None},
        ])
        self.assertEqual(list(out[0]), ["ID", "Name", "age"])

    def test_duplicate_alias_last_wins(self):
        out = to_keyed_records([{"a": 1, "b": 2}], [{"name": "a", "alias": "X"}, {"name": "b", "alias": "X"}])
        self.assertEqual(out, [{"X": 2}])

    def test_inputs_untouched(self):
        records = [{"id": 1, "name": "Ann"}]
        to_keyed_records(records, HEADERS)
        to_rows(records, HEADERS)
        self.assertEqual(records, [{"id": 1, "name": "Ann"}])


if __name__ == "__main__":
    unittest.main()
