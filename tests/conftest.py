"""Shared fixtures for visualscene tests.

All scenes are synthetic, no detectors needed.
"""

import pytest

from visualscene import BoundingRect, Landmark, Object, ObjectParam, Point3D, make_scene


@pytest.fixture
def face_object():
    """Pixel-space face with two eyes, one nested mouth object and params."""
    mouth = Object(
        type_id="mouth",
        tracking_id="mouth-1",
        bounding=BoundingRect(260, 240, 300, 260),
        landmarks=[Landmark("mouth_center", Point3D(280, 250, 2), score=0.9)],
    )
    return Object(
        type_id="face",
        tracking_id="face-1",
        bounding=BoundingRect(200, 120, 360, 300),
        landmarks=[
            Landmark("eye_left", Point3D(250, 180, 4), score=0.97),
            Landmark("eye_right", Point3D(310, 180, 4), score=0.96),
        ],
        objects=[mouth],
        params=[ObjectParam("expression", "smile", score=0.8), ObjectParam("age", 31)],
    )


@pytest.fixture
def pixel_scene(face_object):
    """640x480 scene with one top-level landmark and one face."""
    return make_scene(
        640,
        480,
        landmarks=[Landmark("nose", Point3D(320, 200, 12), score=0.98)],
        objects=[face_object],
        params=[ObjectParam("frame_quality", 0.75)],
        source="face.detect",
    )


@pytest.fixture
def make_landmarks():
    """Factory for ``count`` in-bounds landmarks tagged with ``prefix``."""
    def _make(count: int, prefix: str = "lm"):
        return [
            Landmark(f"{prefix}_{i}", Point3D(10.0 * i, 5.0 * i, 0.0), score=1.0)
            for i in range(count)
        ]
    return _make


@pytest.fixture
def make_nested():
    """Factory for a chain of objects ``depth`` levels deep, each inside its parent."""
    def _make(depth: int, width: int = 640, height: int = 480) -> Object:
        node = None
        for level in reversed(range(depth)):
            inset = 10.0 * level
            node = Object(
                type_id=f"level_{level}",
                tracking_id=f"node-{level}",
                bounding=BoundingRect(inset, inset, width - inset, height - inset),
                landmarks=[Landmark(f"corner_{level}", Point3D(inset, inset, level), score=0.5)],
                objects=[node] if node is not None else [],
                params=[ObjectParam("level", level)],
            )
        return node
    return _make
