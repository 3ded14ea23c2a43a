"""Tests for Object trees: construction, conversion, validation, clamping."""

import numpy as np
import pytest

from visualscene import (
    BoundingRect,
    CoordinateSpace,
    CoordinateSpaceError,
    InvalidArgumentError,
    Landmark,
    Object,
    ObjectKind,
    Point3D,
    SceneInfo,
)


def _assert_same_tree(a: Object, b: Object, rtol: float = 1e-5) -> None:
    """Compare two trees structurally, with float tolerance on coordinates."""
    assert a.type_id == b.type_id
    assert a.tracking_id == b.tracking_id
    assert a.space is b.space
    assert a.params == b.params
    np.testing.assert_allclose(a.bounding.as_tuple(), b.bounding.as_tuple(), rtol=rtol, atol=1e-4)
    assert len(a.landmarks) == len(b.landmarks)
    for la, lb in zip(a.landmarks, b.landmarks):
        assert la.type_id == lb.type_id
        assert la.score == lb.score
        np.testing.assert_allclose(la.location.as_array(), lb.location.as_array(), rtol=rtol, atol=1e-4)
    assert len(a.objects) == len(b.objects)
    for ca, cb in zip(a.objects, b.objects):
        _assert_same_tree(ca, cb, rtol)


class TestObjectConstruction:
    def test_lists_stored_as_tuples(self, face_object):
        assert isinstance(face_object.landmarks, tuple)
        assert isinstance(face_object.objects, tuple)
        assert isinstance(face_object.params, tuple)

    def test_defaults(self):
        obj = Object("car", "car-1", BoundingRect(0, 0, 10, 10))
        assert obj.landmarks == ()
        assert obj.objects == ()
        assert obj.params == ()
        assert obj.space is CoordinateSpace.PIXEL
        assert obj.kind is ObjectKind.PLAIN
        assert obj.scene is None
        assert not obj.is_scene

    def test_width_height(self, face_object):
        assert face_object.width == 160
        assert face_object.height == 180

    def test_frozen(self, face_object):
        with pytest.raises(AttributeError):
            face_object.type_id = "other"  # type: ignore[misc]

    def test_mixed_landmark_space_rejected(self):
        relative = Landmark("x", Point3D(0.5, 0.5), 1.0, space=CoordinateSpace.RELATIVE)
        with pytest.raises(CoordinateSpaceError):
            Object("o", "o-1", BoundingRect(0, 0, 10, 10), landmarks=[relative])

    def test_mixed_child_space_rejected(self, face_object):
        with pytest.raises(CoordinateSpaceError):
            Object(
                "o",
                "o-1",
                BoundingRect(0, 0, 1, 1),
                objects=[face_object],
                space=CoordinateSpace.RELATIVE,
            )

    def test_plain_object_with_scene_payload_rejected(self):
        with pytest.raises(ValueError, match="Only scene objects"):
            Object("o", "o-1", BoundingRect(0, 0, 1, 1), scene=SceneInfo(1, 1))

    def test_scene_kind_requires_payload(self):
        with pytest.raises(ValueError, match="SceneInfo"):
            Object("@scene", "#scene", BoundingRect(0, 0, 1, 1), kind=ObjectKind.SCENE)

    def test_scene_kind_requires_sentinels(self):
        with pytest.raises(ValueError, match="ids"):
            Object(
                "custom",
                "#scene",
                BoundingRect(0, 0, 4, 3),
                kind=ObjectKind.SCENE,
                scene=SceneInfo(4, 3),
            )

    def test_scene_bounding_not_settable(self):
        with pytest.raises(ValueError, match="derived"):
            Object(
                "@scene",
                "#scene",
                BoundingRect(0, 0, 5, 5),
                kind=ObjectKind.SCENE,
                scene=SceneInfo(4, 3),
            )


class TestTreeHelpers:
    def test_walk_preorder(self, face_object):
        ids = [o.tracking_id for o in face_object.walk()]
        assert ids == ["face-1", "mouth-1"]

    def test_depth(self, face_object, make_nested):
        assert face_object.depth() == 2
        assert make_nested(1).depth() == 1
        assert make_nested(6).depth() == 6


class TestObjectToNormalized:
    def test_bounding_per_axis(self, face_object):
        norm = face_object.to_normalized(640, 480)
        assert norm.bounding.left == pytest.approx(200 / 640)
        assert norm.bounding.top == pytest.approx(120 / 480)
        assert norm.bounding.right == pytest.approx(360 / 640)
        assert norm.bounding.bottom == pytest.approx(300 / 480)

    def test_space_tag_at_every_depth(self, make_nested):
        norm = make_nested(5).to_normalized(640, 480)
        for node in norm.walk():
            assert node.space is CoordinateSpace.RELATIVE
            for lm in node.landmarks:
                assert lm.space is CoordinateSpace.RELATIVE

    def test_params_shared_unchanged(self, face_object):
        norm = face_object.to_normalized(640, 480)
        assert norm.params is face_object.params

    def test_landmark_depth_uses_scale(self, face_object):
        norm = face_object.to_normalized(640, 480, pixel_depth_scale=4.0)
        assert norm.landmarks[0].location.z == pytest.approx(1.0)

    def test_invalid_dimensions_abort_whole_call(self, face_object):
        with pytest.raises(InvalidArgumentError):
            face_object.to_normalized(640, 0)

    def test_invalid_dimensions_on_leaf_without_landmarks(self):
        obj = Object("o", "o-1", BoundingRect(0, 0, 1, 1))
        with pytest.raises(InvalidArgumentError):
            obj.to_normalized(-1, 10)

    def test_already_normalized(self, face_object):
        norm = face_object.to_normalized(640, 480)
        with pytest.raises(CoordinateSpaceError):
            norm.to_normalized(640, 480)


class TestObjectToPixel:
    def test_roundtrip(self, face_object):
        back = face_object.to_normalized(640, 480).to_pixel(640, 480)
        _assert_same_tree(back, face_object)

    def test_roundtrip_with_depth_scale(self, face_object):
        back = face_object.to_normalized(640, 480, 250.0).to_pixel(640, 480, 250.0)
        _assert_same_tree(back, face_object)

    def test_depth_preserved(self, make_nested):
        """A depth-N tree keeps its depth, ids and params through a round trip."""
        tree = make_nested(7)
        back = tree.to_normalized(1280, 720).to_pixel(1280, 720)

        assert back.depth() == 7
        for orig, restored in zip(tree.walk(), back.walk()):
            assert orig.type_id == restored.type_id
            assert orig.tracking_id == restored.tracking_id
            assert orig.params == restored.params

    def test_relative_to_pixel_to_relative(self, face_object):
        norm = face_object.to_normalized(640, 480)
        again = norm.to_pixel(640, 480).to_normalized(640, 480)
        _assert_same_tree(again, norm)

    def test_pixel_object_rejected(self, face_object):
        with pytest.raises(CoordinateSpaceError):
            face_object.to_pixel(640, 480)


class TestObjectValidation:
    def test_in_frame_tree_is_valid(self, face_object, make_nested):
        assert face_object.to_normalized(640, 480).is_valid_normalized()
        assert make_nested(4).to_normalized(640, 480).is_valid_normalized(check_z=True)

    def test_pixel_object_not_valid(self, face_object):
        assert face_object.is_valid_normalized() is False

    def test_bounding_out_of_range(self):
        obj = Object("o", "o-1", BoundingRect(-10, 0, 100, 100))
        assert not obj.to_normalized(640, 480).is_valid_normalized()

    def test_landmark_out_of_range(self):
        obj = Object(
            "o",
            "o-1",
            BoundingRect(0, 0, 100, 100),
            landmarks=[Landmark("x", Point3D(900, 10), 1.0)],
        )
        assert not obj.to_normalized(640, 480).is_valid_normalized()

    def test_deep_child_out_of_range(self, make_nested):
        """One bad landmark deep in the tree invalidates the root."""
        leaf = Object(
            "leaf",
            "leaf-1",
            BoundingRect(0, 0, 10, 10),
            landmarks=[Landmark("bad", Point3D(5, 5000), 1.0)],
        )
        tree = make_nested(3)
        middle = tree.objects[0]
        rebuilt = Object(
            tree.type_id,
            tree.tracking_id,
            tree.bounding,
            landmarks=tree.landmarks,
            objects=[Object(middle.type_id, middle.tracking_id, middle.bounding, objects=[leaf])],
        )
        assert not rebuilt.to_normalized(640, 480).is_valid_normalized()

    def test_z_checked_on_request(self):
        obj = Object(
            "o",
            "o-1",
            BoundingRect(0, 0, 10, 10),
            landmarks=[Landmark("x", Point3D(5, 5, 1000), 1.0)],
        )
        norm = obj.to_normalized(640, 480)
        assert norm.is_valid_normalized()
        assert not norm.is_valid_normalized(check_z=True)


class TestObjectClamp:
    def test_clamp_makes_tree_valid(self):
        child = Object(
            "c",
            "c-1",
            BoundingRect(600, 400, 700, 500),
            landmarks=[Landmark("x", Point3D(-3, 700, 0), 1.0)],
        )
        obj = Object("o", "o-1", BoundingRect(-20, -20, 660, 500), objects=[child])
        norm = obj.to_normalized(640, 480)
        assert not norm.is_valid_normalized()

        clamped = norm.clamp_to_relative_bounds()
        assert clamped.is_valid_normalized()
        assert clamped.bounding == BoundingRect(0, 0, 1, 1)
        assert clamped.objects[0].landmarks[0].location.y == 1.0

    def test_clamp_pixel_rejected(self, face_object):
        with pytest.raises(CoordinateSpaceError):
            face_object.clamp_to_relative_bounds()
