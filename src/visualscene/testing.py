"""Testing utilities for processor authors.

FakeImage provides a lightweight stand-in for a camera frame without
requiring an image library in tests.

Example:
    >>> from visualscene.testing import FakeImage, assert_valid_scene
    >>> image = FakeImage.create(640, 480)
    >>> scene = my_processor.on_process(image)
    >>> assert_valid_scene(scene, image=image, processor=my_processor)
"""

from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np

from visualscene.objects import SCENE_TRACKING_ID, SCENE_TYPE_ID, Object


@dataclass
class FakeImage:
    """Lightweight fake image for testing processors.

    Duck-type compatible with the :class:`visualscene.processor.Image`
    protocol, plus a black BGR ``data`` array.

    Example:
        >>> image = FakeImage.create()             # 640x480 black
        >>> images = FakeImage.sequence(3, 320, 240)
    """

    data: np.ndarray
    width: int
    height: int
    frame_id: int = 0

    @classmethod
    def create(cls, width: int = 640, height: int = 480, frame_id: int = 0) -> "FakeImage":
        """Create a single black BGR image."""
        data = np.zeros((height, width, 3), dtype=np.uint8)
        return cls(data=data, width=width, height=height, frame_id=frame_id)

    @classmethod
    def sequence(cls, count: int, width: int = 640, height: int = 480) -> List["FakeImage"]:
        """Create images with incrementing frame ids."""
        return [cls.create(width, height, frame_id=i) for i in range(count)]


def assert_valid_scene(
    scene: Any,
    *,
    image: Optional[Any] = None,
    processor: Optional[Any] = None,
    require_normalized: bool = False,
) -> None:
    """Assert that a scene follows visualscene conventions.

    Args:
        scene: Value to check.
        image: If provided, asserts the scene is sized to it.
        processor: If provided, asserts the scene's source is its name.
        require_normalized: If True, asserts a valid relative scene.

    Raises:
        AssertionError: If any check fails.
    """
    assert isinstance(scene, Object), f"Expected Object, got {type(scene).__name__}"
    assert scene.is_scene, f"Object '{scene.tracking_id}' is not a scene"
    assert scene.type_id == SCENE_TYPE_ID
    assert scene.tracking_id == SCENE_TRACKING_ID

    if image is not None:
        assert scene.scene.original_width == image.width, (
            f"Scene width {scene.scene.original_width} != image width {image.width}"
        )
        assert scene.scene.original_height == image.height, (
            f"Scene height {scene.scene.original_height} != image height {image.height}"
        )
    if processor is not None:
        assert scene.scene.source == processor.name, (
            f"Scene source {scene.scene.source!r} != processor {processor.name!r}"
        )
    if require_normalized:
        assert scene.is_valid_normalized(), "Scene is not a valid normalized scene"


__all__ = ["FakeImage", "assert_valid_scene"]
