"""Unit tests for Document path lookups."""

from __future__ import annotations

from laakhay.paging import Document, lookup_path

RESPONSE = {
    "Contents": [{"Key": "a.txt", "Size": 1}, {"Key": "b.txt", "Size": 2}],
    "Owner": {"Id": "42"},
    "IsTruncated": False,
}


class TestLookupPath:
    """Test path resolution."""

    def test_nested_mapping(self):
        assert lookup_path(RESPONSE, "Owner/Id") == "42"

    def test_list_index(self):
        assert lookup_path(RESPONSE, "Contents/0/Key") == "a.txt"
        assert lookup_path(RESPONSE, "Contents/-1/Key") == "b.txt"

    def test_wildcard(self):
        assert lookup_path(RESPONSE, "Contents/*/Key") == ["a.txt", "b.txt"]

    def test_nested_wildcards_flatten(self):
        data = {"Pages": [{"Rows": [{"id": 1}, {"id": 2}]}, {"Rows": [{"id": 3}]}]}
        assert lookup_path(data, "Pages/*/Rows/*/id") == [1, 2, 3]

    def test_missing_segments_return_none(self):
        assert lookup_path(RESPONSE, "Owner/Name") is None
        assert lookup_path(RESPONSE, "Contents/5/Key") is None
        assert lookup_path(RESPONSE, "Contents/first") is None
        assert lookup_path(RESPONSE, "Owner/Id/Extra") is None
        assert lookup_path(RESPONSE, "") is None

    def test_falsy_values_preserved(self):
        assert lookup_path(RESPONSE, "IsTruncated") is False


class TestDocument:
    """Test the Document mapping."""

    def test_get_path(self):
        doc = Document(RESPONSE)
        assert doc.get_path("Contents/1/Size") == 2

    def test_custom_separator(self):
        doc = Document(RESPONSE, separator=".")
        assert doc.get_path("Owner.Id") == "42"

    def test_mapping_interface(self):
        doc = Document(RESPONSE)
        assert doc["Owner"] == {"Id": "42"}
        assert set(doc) == {"Contents", "Owner", "IsTruncated"}
        assert len(doc) == 3
        assert doc.data is RESPONSE

    def test_top_level_array(self):
        rows = [{"id": 1}, {"id": 2}]
        doc = Document(rows)

        assert doc.get_path("*/id") == [1, 2]
        assert doc.get_path("-1/id") == 2
        assert doc.get_path("*") == rows
        assert len(doc) == 0
        assert doc.data is rows
