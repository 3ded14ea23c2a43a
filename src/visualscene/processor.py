"""Producer boundary: image processors that emit scenes.

Detection itself lives outside this package. A processor subclass wraps
a detector, turns its output into a pixel-space scene with
:meth:`SceneImageProcessor.create_result_scene`, and may optionally draw
an overlay in :meth:`SceneImageProcessor.render_visualization`.

Example:
    >>> class FaceProcessor(SceneImageProcessor):
    ...     @property
    ...     def name(self):
    ...         return "face.detect"
    ...
    ...     def process(self, image):
    ...         faces = self._backend.detect(image.data)
    ...         return self.create_result_scene(image, objects=faces)
    >>>
    >>> scene = run_processors([FaceProcessor(), HandProcessor()], image)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from visualscene.landmark import Landmark
from visualscene.objects import Object
from visualscene.params import ObjectParam
from visualscene.scene import compose_scene_from_processing_results, is_scene, make_scene

logger = logging.getLogger(__name__)


@runtime_checkable
class Image(Protocol):
    """Anything with pixel dimensions, such as a decoded video frame."""

    width: int
    height: int


class SceneImageProcessor(ABC):
    """Base class for processors that turn an image into a scene."""

    @property
    def name(self) -> str:
        """Processor name, stamped on produced scenes as their source."""
        return type(self).__name__

    @abstractmethod
    def process(self, image: Image) -> Optional[Object]:
        """Detect on ``image`` and return a pixel-space scene.

        Returns:
            Scene built with create_result_scene(), or None if nothing was
            detected.
        """
        ...

    def render_visualization(self, scene: Object, image: Image, canvas: Any) -> None:
        """Draw an overlay for ``scene`` onto ``canvas``.

        Does nothing by default. Override to provide rendering.
        """

    def on_process(self, image: Image, canvas: Optional[Any] = None) -> Optional[Object]:
        """Run process() and, when a canvas is given, render the result.

        Raises:
            TypeError: If process() returns something other than a scene.
        """
        scene = self.process(image)
        if scene is None:
            return None
        if not is_scene(scene):
            raise TypeError(
                f"{self.name}.process() must return a scene or None, "
                f"got {type(scene).__name__}"
            )
        if canvas is not None:
            self.render_visualization(scene, image, canvas)
        return scene

    def create_result_scene(
        self,
        image: Image,
        landmarks: Sequence[Landmark] = (),
        objects: Sequence[Object] = (),
        params: Sequence[ObjectParam] = (),
    ) -> Object:
        """Build a scene sized to ``image`` with this processor as source."""
        return make_scene(
            image.width,
            image.height,
            landmarks=landmarks,
            objects=objects,
            params=params,
            source=self.name,
        )

    compose_scene_from_processing_results = staticmethod(
        compose_scene_from_processing_results
    )


def run_processors(
    processors: Iterable[SceneImageProcessor],
    image: Image,
    canvas: Optional[Any] = None,
) -> Optional[Object]:
    """Run processors in order on one image and merge their scenes.

    Returns:
        The composed scene, or None if no processor detected anything.

    Raises:
        DimensionMismatchError: If a processor sized its scene to a
            different image.
    """
    results: List[Optional[Object]] = []
    for processor in processors:
        scene = processor.on_process(image, canvas)
        logger.debug(
            "%s produced %s",
            processor.name,
            "no scene" if scene is None else f"{len(scene.objects)} object(s)",
        )
        results.append(scene)
    return compose_scene_from_processing_results(results)


__all__ = ["Image", "SceneImageProcessor", "run_processors"]
