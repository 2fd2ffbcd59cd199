import json
import unittest

from fastapi.testclient import TestClient

from main import app

RECORDS = [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bo"}]
HEADERS = [{"name": "id", "alias": "ID"}, {"name": "name", "alias": "Name"}]


class TestExportAPI(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_root_lists_formats(self):
        rv = self.client.get("/")
        self.assertEqual(rv.status_code, 200)
        self.assertIn("xlsx", rv.json()["formats"])

    def test_json_download(self):
        rv = self.client.post("/export/json", json={
            "records": RECORDS, "filename": "people", "options": {"headers": HEADERS},
        })
        self.assertEqual(rv.status_code, 200)
        self.assertEqual(rv.headers["content-disposition"], 'attachment; filename="people.json"')
        self.assertTrue(rv.headers["content-type"].startswith("application/json"))
        self.assertEqual(json.loads(rv.content), [{"ID": 1, "Name": "Ann"}, {"ID": 2, "Name": "Bo"}])

    def test_xml_download(self):
        rv = self.client.post("/export/xml", json={"records": RECORDS})
        self.assertEqual(rv.status_code, 200)
        self.assertEqual(rv.headers["content-disposition"], 'attachment; filename="export.xml"')
        self.assertIn("<name>Bo</name>", rv.text)

    def test_xlsx_download(self):
        rv = self.client.post("/export/xlsx", json={"records": RECORDS, "filename": "book"})
        self.assertEqual(rv.status_code, 200)
        self.assertTrue(rv.content.startswith(b"PK"))

    def test_unknown_format(self):
        rv = self.client.post("/export/pdf", json={"records": RECORDS})
        self.assertEqual(rv.status_code, 404)

    def test_duplicate_alias_rejected(self):
        rv = self.client.post("/export/csv", json={
            "records": RECORDS,
            "options": {
                "headers": [{"name": "id", "alias": "X"}, {"name": "name", "alias": "X"}],
                "fail_on_duplicate_alias": True,
            },
        })
        self.assertEqual(rv.status_code, 422)
        self.assertIn("Duplicate header alias", rv.json()["detail"])


if __name__ == "__main__":
    unittest.main()
