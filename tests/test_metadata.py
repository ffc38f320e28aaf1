"""Tests for metadata sanitization, flattening and merging."""

from __future__ import annotations

from datetime import datetime

import pytest

from licensechain.errors import ValidationError
from licensechain.metadata import (
    deep_merge,
    flatten_metadata,
    sanitize_metadata,
    unflatten_metadata,
)


class TestSanitizeMetadata:
    def test_strings_escaped_at_every_depth(self) -> None:
        metadata = {
            "note": "<b>hi</b>",
            "nested": {"quote": 'say "x"', "deeper": {"amp": "a & b"}},
            "items": ["<i>", {"inside_list": "it's"}, ["<x>"]],
        }

        result = sanitize_metadata(metadata)

        assert result == {
            "note": "&lt;b&gt;hi&lt;/b&gt;",
            "nested": {"quote": "say &quot;x&quot;", "deeper": {"amp": "a &amp; b"}},
            "items": ["&lt;i&gt;", {"inside_list": "it&#x27;s"}, ["&lt;x&gt;"]],
        }

    def test_scalars_pass_through(self) -> None:
        metadata = {"count": 3, "ratio": 0.5, "enabled": True, "missing": None}
        assert sanitize_metadata(metadata) == metadata

    def test_tuple_becomes_list(self) -> None:
        assert sanitize_metadata({"pair": ("<a>", 1)}) == {"pair": ["&lt;a&gt;", 1]}

    def test_input_not_modified(self) -> None:
        metadata = {"note": "<b>", "nested": {"x": "<y>"}}
        sanitize_metadata(metadata)
        assert metadata == {"note": "<b>", "nested": {"x": "<y>"}}

    def test_keys_untouched(self) -> None:
        assert sanitize_metadata({"<k>": "v"}) == {"<k>": "v"}

    def test_empty(self) -> None:
        assert sanitize_metadata({}) == {}

    def test_unsupported_value_rejected_with_path(self) -> None:
        with pytest.raises(ValidationError, match=r"nested\.when"):
            sanitize_metadata({"nested": {"when": datetime(2024, 1, 1)}})

    def test_unsupported_value_in_list_rejected(self) -> None:
        with pytest.raises(ValidationError, match=r"items\[1\]"):
            sanitize_metadata({"items": ["ok", b"bytes"]})

    def test_non_string_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            sanitize_metadata({"nested": {1: "x"}})


class TestFlattenMetadata:
    def test_nested_maps_and_lists(self) -> None:
        metadata = {"a": {"b": {"c": 1}}, "tags": ["x", {"k": "v"}], "top": True}
        assert flatten_metadata(metadata) == {
            "a.b.c": 1,
            "tags.0": "x",
            "tags.1.k": "v",
            "top": True,
        }

    def test_custom_separator(self) -> None:
        assert flatten_metadata({"a": {"b": 1}}, separator="/") == {"a/b": 1}

    def test_empty_containers_kept_as_leaves(self) -> None:
        assert flatten_metadata({"a": {}, "b": [], "c": None}) == {"a": {}, "b": [], "c": None}


class TestUnflattenMetadata:
    def test_rebuilds_maps(self) -> None:
        assert unflatten_metadata({"a.b.c": 1, "a.d": "x", "e": None}) == {
            "a": {"b": {"c": 1}, "d": "x"},
            "e": None,
        }

    def test_flatten_then_unflatten_maps_only(self) -> None:
        metadata = {"plan": {"tier": "pro", "limits": {"seats": 5}}, "region": "eu"}
        assert unflatten_metadata(flatten_metadata(metadata)) == metadata

    @pytest.mark.parametrize(
        "flat",
        [
            {"a": 1, "a.b": 2},
            {"a.b": 2, "a": 1},
        ],
    )
    def test_conflicting_keys_rejected(self, flat: dict[str, int]) -> None:
        with pytest.raises(ValidationError):
            unflatten_metadata(flat)


class TestDeepMerge:
    def test_nested_maps_merged(self) -> None:
        target = {"a": {"x": 1, "y": 2}, "b": 1}
        source = {"a": {"y": 3, "z": 4}, "c": 5}
        assert deep_merge(target, source) == {"a": {"x": 1, "y": 3, "z": 4}, "b": 1, "c": 5}

    def test_non_map_values_replaced(self) -> None:
        assert deep_merge({"a": {"x": 1}, "l": [1]}, {"a": 2, "l": [2]}) == {"a": 2, "l": [2]}

    def test_inputs_not_modified(self) -> None:
        target = {"a": {"x": 1}}
        source = {"a": {"y": 2}}
        deep_merge(target, source)
        assert target == {"a": {"x": 1}}
        assert source == {"a": {"y": 2}}


class TestNonFiniteNumbers:
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_rejected_at_top_level(self, value: float) -> None:
        with pytest.raises(ValidationError, match="not a finite number"):
            sanitize_metadata({"score": value})

    def test_rejected_inside_list_with_path(self) -> None:
        with pytest.raises(ValidationError, match=r"scores\[1\]"):
            sanitize_metadata({"scores": [1.0, float("nan")]})

    def test_finite_floats_kept(self) -> None:
        assert sanitize_metadata({"ratio": 0.25, "big": 1e308}) == {"ratio": 0.25, "big": 1e308}
