"""Unit tests for resource kinds, resource maps and the resource-code language."""

import pytest

from splendor.game.resources import (
    NUM_KINDS, PICK_THREE_CANDIDATES, RESOURCE_CODES, ResourceKind, ResourceMap,
    check_count,
)
from splendor.game.state import Card, Nobel


class TestResourceKind:
    def test_five_kinds(self):
        assert NUM_KINDS == 5
        assert set(RESOURCE_CODES.values()) == set(ResourceKind)

    def test_labels(self):
        assert ResourceKind.RED.label == "Red"
        assert ResourceKind.from_label("Black") == ResourceKind.BLACK
        assert ResourceKind.from_label("blue") == ResourceKind.BLUE

    def test_unknown_label(self):
        with pytest.raises(ValueError):
            ResourceKind.from_label("Gold")


class TestResourceMap:
    def test_zero_init_has_every_kind(self):
        m = ResourceMap.zeros()
        assert [count for _, count in m] == [0] * 5
        assert m.total() == 0

    def test_add(self):
        a = ResourceMap.from_code("1r+2u")
        b = ResourceMap.from_code("3r+1k")
        a.add(b)
        assert a[ResourceKind.RED] == 4
        assert a[ResourceKind.BLUE] == 2
        assert a[ResourceKind.BLACK] == 1
        assert b == ResourceMap.from_code("3r+1k")

    def test_subtract_refuses_negative(self):
        a = ResourceMap.from_code("1r")
        with pytest.raises(ValueError):
            a.subtract(ResourceMap.from_code("2r"))
        assert a == ResourceMap.from_code("1r")

    def test_set_negative_fails(self):
        m = ResourceMap.zeros()
        with pytest.raises(ValueError):
            m[ResourceKind.GREEN] = -1
        assert m[ResourceKind.GREEN] == 0

    def test_negative_construction_fails(self):
        with pytest.raises(ValueError):
            ResourceMap([0, 0, -1, 0, 0])

    def test_copy_is_independent(self):
        a = ResourceMap.filled(3)
        b = a.copy()
        b[ResourceKind.WHITE] = 0
        assert a[ResourceKind.WHITE] == 3

    def test_shortfall(self):
        have = ResourceMap.from_code("2r+1u")
        need = ResourceMap.from_code("3r+1u+2g")
        assert have.shortfall(need) == ResourceMap.from_code("1r+2g")

    def test_dict_roundtrip(self):
        m = ResourceMap.from_code("1w+4k")
        assert m.to_dict()["White"] == 1
        assert ResourceMap.from_dict(m.to_dict()) == m


class TestResourceCode:
    def test_parse(self):
        m = ResourceMap.from_code("1w+1u+1g+1r")
        assert m[ResourceKind.WHITE] == 1
        assert m[ResourceKind.BLUE] == 1
        assert m[ResourceKind.GREEN] == 1
        assert m[ResourceKind.RED] == 1
        assert m[ResourceKind.BLACK] == 0

    def test_empty_code(self):
        assert ResourceMap.from_code("") == ResourceMap.zeros()

    def test_multi_digit_count(self):
        assert ResourceMap.from_code("10k")[ResourceKind.BLACK] == 10

    def test_to_code(self):
        assert ResourceMap.from_code("3k+2r").to_code() == "2r+3k"
        assert ResourceMap.zeros().to_code() == ""

    @pytest.mark.parametrize("code", ["1x", "r", "1r+", "1r+2r", "two-r"])
    def test_invalid_codes(self, code):
        with pytest.raises(ValueError):
            ResourceMap.from_code(code)


class TestPickThreeCandidates:
    def test_ten_distinct_triples(self):
        assert len(PICK_THREE_CANDIDATES) == 10
        as_sets = {frozenset(t) for t in PICK_THREE_CANDIDATES}
        assert len(as_sets) == 10
        assert all(len(t) == 3 for t in as_sets)


class TestResourceMapFromDict:
    FULL = {"Red": 1, "Blue": 0, "Green": 2, "White": 0, "Black": 3}

    def test_exact_labels(self):
        assert ResourceMap.from_dict(self.FULL) == ResourceMap.from_code("1r+2g+3k")

    @pytest.mark.parametrize("change", [
        {"Red": None},            # kind missing
        {"Gold": 1},              # extra kind
        {"Red": 1.7},
        {"Red": "1"},
        {"Red": True},
        {"Red": -1},
    ])
    def test_rejects_incomplete_or_mistyped(self, change):
        data = dict(self.FULL)
        for label, value in change.items():
            if value is None:
                del data[label]
            else:
                data[label] = value
        with pytest.raises(ValueError):
            ResourceMap.from_dict(data)

    def test_rejects_lowercase_labels(self):
        with pytest.raises(ValueError):
            ResourceMap.from_dict({k.lower(): v for k, v in self.FULL.items()})

    def test_rejects_non_mapping(self):
        with pytest.raises(ValueError):
            ResourceMap.from_dict([1, 2, 3, 4, 5])


class TestCheckCount:
    def test_accepts_plain_ints(self):
        assert check_count(0, "x") == 0
        assert check_count(7, "x") == 7

    @pytest.mark.parametrize("value", [-1, 1.0, "3", False, None])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            check_count(value, "x")


class TestCardCost:
    def test_card_cost_is_read_only(self):
        c = Card.from_code("r", 1, "2u")
        with pytest.raises(ValueError):
            c.cost[ResourceKind.BLUE] = 0
        with pytest.raises(ValueError):
            c.cost.add(ResourceMap.filled(1))
        assert c.cost == ResourceMap.from_code("2u")

    def test_copy_of_cost_is_writable(self):
        cost = Card.from_code("r", 1, "2u").cost.copy()
        cost[ResourceKind.BLUE] = 0
        assert cost.total() == 0

    def test_nobel_cost_is_read_only(self):
        n = Nobel.from_code(3, "3r+3k")
        with pytest.raises(ValueError):
            n.cost[ResourceKind.RED] = 0
