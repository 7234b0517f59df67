"""Tests for filter, map, condense_map and for_each."""

import copy
import pytest
from objockey import JsonValue
from objockey.types import ErrorType, MergeShapeConflict


class TestFilter:
    """Tests for JsonValue.filter()."""

    def test_sequence_filter(self):
        """Test that matching elements keep their relative order."""
        data = [1, 2, 3, 4, 5, 6]
        value = JsonValue(data)

        result = value.filter(lambda v, i, p: v % 2 == 0)

        assert result == [2, 4, 6]
        assert data == [1, 2, 3, 4, 5, 6]
        assert result is not data

    def test_filter_by_position(self):
        """Test filtering on the position argument."""
        assert JsonValue(["a", "b", "c"]).filter(lambda v, i, p: i != 1) == ["a", "c"]

    def test_mapping_filter(self, sample_dict_json):
        """Test that matching entries keep their order and values."""
        original = copy.deepcopy(sample_dict_json)
        value = JsonValue(sample_dict_json)

        result = value.filter(lambda k, v, m: v["age"] > 26)

        assert list(result) == ["user1", "user3"]
        assert result["user3"] is sample_dict_json["user3"]
        assert value.payload == original

    def test_filter_no_match(self):
        """Test that no match gives an empty container of the same shape."""
        assert JsonValue([1]).filter(lambda *args: False) == []
        assert JsonValue({"a": 1}).filter(lambda *args: False) == {}

    def test_filter_empty_payload(self):
        """Test filtering an empty wrapper."""
        assert JsonValue().filter(lambda *args: True) == {}

    def test_filter_chain_with_set(self):
        """Test keeping a filtered result with set()."""
        value = JsonValue([1, 2, 3])

        value.set(value.filter(lambda v, i, p: v > 1))

        assert value.payload == [2, 3]


class TestMap:
    """Tests for JsonValue.map()."""

    def test_sequence_map(self):
        """Test positional mapping over a sequence."""
        data = [1, 2, 3]

        assert JsonValue(data).map(lambda v, i, p: v * 2) == [2, 4, 6]
        assert data == [1, 2, 3]

    def test_sequence_map_keeps_none(self):
        """Test that None results stay as placeholders."""
        result = JsonValue([1, 2, 3]).map(lambda v, i, p: v if v > 1 else None)

        assert result == [None, 2, 3]

    def test_sequence_map_falsy_results(self):
        """Test that falsy results are kept as they are."""
        assert JsonValue([1, 2]).map(lambda v, i, p: 0) == [0, 0]

    def test_sequence_map_receives_payload(self):
        """Test that the third argument is the payload, not the new list."""
        data = [1, 2]
        seen = []
        JsonValue(data).map(lambda v, i, p: seen.append(p))

        assert all(p is data for p in seen)

    def test_mapping_map(self):
        """Test merging single-entry results into a new mapping."""
        value = JsonValue({"a": 1, "b": 2})

        assert value.map(lambda k, v, m: {k.upper(): v * 10}) == {"A": 10, "B": 20}

    def test_mapping_map_none_becomes_null(self):
        """Test that a None result becomes {key: None}."""
        value = JsonValue({"a": 1, "b": 2})

        result = value.map(lambda k, v, m: {k: v} if v > 1 else None)

        assert result == {"a": None, "b": 2}
        assert list(result) == ["a", "b"]

    def test_mapping_map_later_keys_win(self):
        """Test that duplicate keys are overwritten in iteration order."""
        value = JsonValue({"a": 1, "b": 2, "c": 3})

        assert value.map(lambda k, v, m: {"total": v}) == {"total": 3}

    def test_mapping_map_multi_entry_results(self):
        """Test that every entry of a result is merged."""
        value = JsonValue({"a": 1})

        assert value.map(lambda k, v, m: {k: v, f"{k}_copy": v}) == {"a": 1, "a_copy": 1}

    @pytest.mark.parametrize("result", [[1], "text", 5, True])
    def test_mapping_map_rejects_non_mappings(self, result):
        """Test that non-dict results cannot be merged."""
        with pytest.raises(MergeShapeConflict, match=type(result).__name__):
            JsonValue({"a": 1}).map(lambda k, v, m: result)

    def test_map_empty_payload(self):
        """Test mapping an empty wrapper."""
        assert JsonValue().map(lambda *args: 1) == {}


class TestCondenseMap:
    """Tests for JsonValue.condense_map()."""

    def test_sequence_drops_none(self):
        """Test that None results are omitted."""
        result = JsonValue([1, 2, 3, 4]).condense_map(lambda v, i, p: v * 10 if v % 2 else None)

        assert result == [10, 30]

    def test_sequence_keeps_falsy(self):
        """Test that only None is treated as absent."""
        assert JsonValue([1, 2]).condense_map(lambda v, i, p: 0) == [0, 0]

    def test_mapping_drops_none(self):
        """Test that None results leave no entry at all."""
        value = JsonValue({"a": 1, "b": 2, "c": 3})

        result = value.condense_map(lambda k, v, m: {k: v} if v != 2 else None)

        assert result == {"a": 1, "c": 3}
        assert "b" not in result

    def test_mapping_sequence_result_conflict(self):
        """Test that a list result cannot merge into a mapping."""
        value = JsonValue({"a": 1, "b": 2})

        with pytest.raises(MergeShapeConflict, match="type list") as exc_info:
            value.condense_map(lambda k, v, m: [k, v] if k == "b" else {k: v})

        assert exc_info.value.error_type == ErrorType.MERGE
        assert exc_info.value.context == {"value": ["b", 2]}

    def test_mapping_scalar_result_conflict(self):
        """Test that a scalar result names its type."""
        with pytest.raises(MergeShapeConflict, match="type int"):
            JsonValue({"a": 1}).condense_map(lambda k, v, m: v)

    def test_payload_untouched(self):
        """Test that condense_map does not modify the payload."""
        data = {"a": 1}
        JsonValue(data).condense_map(lambda k, v, m: {"b": 2})

        assert data == {"a": 1}


class TestForEach:
    """Tests for JsonValue.for_each()."""

    def test_sequence_visit(self):
        """Test that every element is visited in order."""
        data = ["x", "y", "z"]
        seen = []

        result = JsonValue(data).for_each(lambda v, i, p: seen.append((v, i)))

        assert seen == [("x", 0), ("y", 1), ("z", 2)]
        assert isinstance(result, JsonValue)

    def test_mapping_visit(self):
        """Test that every entry is visited in insertion order."""
        seen = []

        JsonValue({"b": 1, "a": 2}).for_each(lambda k, v, m: seen.append((k, v)))

        assert seen == [("b", 1), ("a", 2)]

    def test_chaining(self):
        """Test chaining a mutator after for_each."""
        total = []
        value = JsonValue([1, 2]).for_each(lambda v, i, p: total.append(v)).push(3)

        assert value.payload == [1, 2, 3]
        assert total == [1, 2]

    def test_mapping_mutation_during_visit(self):
        """Test that entries added during the visit are not visited."""
        data = {"a": 1}
        seen = []

        def action(k, v, m):
            seen.append(k)
            m["b"] = 2

        JsonValue(data).for_each(action)

        assert seen == ["a"]
        assert data == {"a": 1, "b": 2}

    def test_empty_payload(self):
        """Test that an empty wrapper visits nothing."""
        seen = []
        JsonValue().for_each(lambda *args: seen.append(args))

        assert seen == []

    def test_sequence_mutation_during_visit(self):
        """Test that elements appended during the visit are not visited."""
        data = [1, 2]
        seen = []

        def action(v, i, p):
            seen.append(v)
            p.append(v * 10)

        JsonValue(data).for_each(action)

        assert seen == [1, 2]
        assert data == [1, 2, 10, 20]
