"""Tests for the shallow lookup helpers."""

import pytest

from visualscene import (
    BoundingRect,
    Landmark,
    Object,
    ObjectParam,
    Point3D,
    get_by_tracking_id,
    get_by_type,
    get_by_type_prefix,
    get_param,
    get_param_value,
)


def _obj(type_id, tracking_id, children=()):
    return Object(type_id, tracking_id, BoundingRect(0, 0, 1, 1), objects=children)


@pytest.fixture
def objects():
    return [_obj("a", "t1"), _obj("ab", "t2"), _obj("b", "t3")]


class TestGetByType:
    def test_exact_match(self, objects):
        result = get_by_type(objects, "a")
        assert [o.tracking_id for o in result] == ["t1"]

    def test_all_matches_in_order(self):
        landmarks = [
            Landmark("eye", Point3D(1, 1), 0.9),
            Landmark("nose", Point3D(2, 2), 0.8),
            Landmark("eye", Point3D(3, 3), 0.7),
        ]
        result = get_by_type(landmarks, "eye")
        assert [lm.score for lm in result] == [0.9, 0.7]

    def test_no_match(self, objects):
        assert get_by_type(objects, "zzz") == []

    def test_none_collection(self):
        assert get_by_type(None, "a") == []

    def test_works_on_normalized_landmarks(self):
        landmarks = [Landmark("eye", Point3D(64, 48), 0.9).to_normalized(640, 480)]
        assert get_by_type(landmarks, "eye") == landmarks


class TestGetByTypePrefix:
    def test_prefix_match(self, objects):
        result = get_by_type_prefix(objects, "a")
        assert [o.tracking_id for o in result] == ["t1", "t2"]

    def test_prefix_is_not_a_pattern(self):
        items = [_obj("a.b", "t1"), _obj("axb", "t2")]
        assert [o.tracking_id for o in get_by_type_prefix(items, "a.")] == ["t1"]

    def test_empty_prefix_matches_all(self, objects):
        assert get_by_type_prefix(objects, "") == objects

    def test_none_collection(self):
        assert get_by_type_prefix(None, "a") == []

    def test_params(self):
        params = [ObjectParam("emotion.happy", 0.7), ObjectParam("emotion.sad", 0.1), ObjectParam("age", 30)]
        assert [p.type_id for p in get_by_type_prefix(params, "emotion.")] == [
            "emotion.happy",
            "emotion.sad",
        ]


class TestGetByTrackingId:
    def test_found(self, objects):
        assert get_by_tracking_id(objects, "t2").type_id == "ab"

    def test_missing(self, objects):
        assert get_by_tracking_id(objects, "nope") is None

    def test_first_wins_on_duplicates(self):
        items = [_obj("x", "dup"), _obj("y", "dup")]
        assert get_by_tracking_id(items, "dup").type_id == "x"

    def test_shallow(self):
        """Children are not searched; walk() flattens the tree first."""
        parent = _obj("p", "parent", children=[_obj("c", "child")])
        assert get_by_tracking_id([parent], "child") is None
        assert get_by_tracking_id(parent.walk(), "child").type_id == "c"

    def test_none_collection(self):
        assert get_by_tracking_id(None, "t1") is None


class TestGetParam:
    def test_first_match(self):
        params = [ObjectParam("age", 30), ObjectParam("age", 40)]
        assert get_param(params, "age").value == 30

    def test_missing(self):
        assert get_param([ObjectParam("age", 30)], "name") is None
        assert get_param(None, "name") is None

    def test_value_with_default(self):
        params = [ObjectParam("name", "ana")]
        assert get_param_value(params, "name") == "ana"
        assert get_param_value(params, "age", default=0) == 0
