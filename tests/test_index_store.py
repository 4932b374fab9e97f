"""Tests for the JSON index storage helpers."""

import json
import re

import jsonschema
import pytest

from conftest import make_index, make_item
from skills_feed.index_store import (
    load_first_seen,
    load_index,
    save_first_seen,
    stamp_first_seen,
    utc_now,
    write_json,
)


def test_utc_now_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_now())


def test_load_first_seen_missing_file(tmp_path):
    assert load_first_seen(tmp_path / "nope.json") == {}


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_load_first_seen_unreadable_file(tmp_path, content):
    path = tmp_path / "skills_first_seen.json"
    path.write_text(content, encoding="utf-8")

    assert load_first_seen(path) == {}


def test_first_seen_round_trip_sorts_keys(tmp_path):
    path = tmp_path / "skills_first_seen.json"

    save_first_seen(path, {"z/b": "t2", "a/b": "t1"})

    assert list(json.loads(path.read_text(encoding="utf-8"))) == ["a/b", "z/b"]
    assert load_first_seen(path) == {"a/b": "t1", "z/b": "t2"}


def test_stamp_first_seen_is_append_only():
    first_seen = {"a/b": "2024-01-01T00:00:00Z"}

    stamped = stamp_first_seen(first_seen, ["a/b", "c/d"], "2025-01-01T00:00:00Z")

    assert stamped == {"a/b": "2024-01-01T00:00:00Z", "c/d": "2025-01-01T00:00:00Z"}
    assert first_seen == {"a/b": "2024-01-01T00:00:00Z"}


def test_write_json_is_pretty_printed(tmp_path):
    path = tmp_path / "nested" / "out.json"

    write_json(path, {"name": "café", "n": 1})

    assert path.read_text(encoding="utf-8") == '{\n  "name": "café",\n  "n": 1\n}'


def test_write_json_failure_keeps_previous_file(tmp_path):
    path = tmp_path / "out.json"
    path.write_text("previous", encoding="utf-8")

    with pytest.raises(TypeError):
        write_json(path, {"bad": object()})

    assert path.read_text(encoding="utf-8") == "previous"
    assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


def test_load_index_validates(tmp_path):
    path = tmp_path / "skills_index.json"
    index = make_index([make_item("a/b", "c", installs=3)])
    path.write_text(json.dumps(index), encoding="utf-8")

    assert load_index(path) == index

    index["items"][0]["installsAllTime"] = "many"
    path.write_text(json.dumps(index), encoding="utf-8")

    with pytest.raises(jsonschema.ValidationError):
        load_index(path)
