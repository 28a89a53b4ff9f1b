"""Unit tests for loading iterator definitions from JSON."""

from __future__ import annotations

import json

import pytest

from laakhay.paging import (
    ConfigurationError,
    PaginationIteratorFactory,
    iterator_factory_from_file,
    load_iterator_definitions,
)


def test_load_flat_mapping(tmp_path):
    path = tmp_path / "iterators.json"
    path.write_text(json.dumps({"ListUsers": {"result_key": "Users"}}))

    assert load_iterator_definitions(path) == {"ListUsers": {"result_key": "Users"}}


def test_load_service_document(tmp_path):
    path = tmp_path / "service.json"
    path.write_text(
        json.dumps(
            {
                "operations": {
                    "ListObjects": {
                        "input_token": "Marker",
                        "output_token": "NextMarker",
                        "result_key": "Contents",
                    },
                    "ListObjectVersions": {
                        "input_token": ["KeyMarker", "VersionIdMarker"],
                        "output_token": ["NextKeyMarker", "NextVersionIdMarker"],
                        "result_key": "Versions",
                    },
                }
            }
        )
    )

    factory = iterator_factory_from_file(path)

    assert isinstance(factory, PaginationIteratorFactory)
    assert factory.can_build("ListObjects")
    assert factory.get_config("ListObjectVersions").input_token == ("KeyMarker", "VersionIdMarker")


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot read"):
        load_iterator_definitions(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(ConfigurationError, match="Cannot read"):
        load_iterator_definitions(path)


def test_bad_shape(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps({"ListUsers": "Users"}))

    with pytest.raises(ConfigurationError, match="must map operation names"):
        load_iterator_definitions(path)


def test_invalid_definition_surfaces_at_factory(tmp_path):
    path = tmp_path / "iterators.json"
    path.write_text(json.dumps({"ListUsers": {"limit_param": "MaxItems"}}))

    with pytest.raises(ConfigurationError, match="ListUsers"):
        iterator_factory_from_file(path)
