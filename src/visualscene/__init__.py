"""visualscene: landmark/object/scene model for vision pipelines.

Detected entities live in pixel space when a detector emits them and in
relative [0, 1] space for storage and interchange. Conversions are exact
inverses of each other modulo float32 rounding.

Example:
    >>> from visualscene import Landmark, Point3D, make_scene, scene_to_normalized
    >>> nose = Landmark("nose", Point3D(320, 200, 12), score=0.98)
    >>> scene = make_scene(640, 480, landmarks=[nose], source="pose.detect")
    >>> normalized = scene_to_normalized(scene)
    >>> normalized.is_valid_normalized()
    True
"""

# Errors
from visualscene.errors import (
    InvalidArgumentError,
    DimensionMismatchError,
    CoordinateSpaceError,
)

# Values
from visualscene.space import CoordinateSpace, COORDINATE_MIN, COORDINATE_MAX, COORDINATE_RANGE
from visualscene.point import Point3D
from visualscene.rect import BoundingRect

# Coordinate transforms
from visualscene.normalizer import (
    pixel_to_relative,
    relative_to_pixel,
    calculate_aspect_ratio,
    is_valid_relative_point,
    clamp_to_relative_bounds,
    rect_to_relative,
    rect_to_pixel,
    is_valid_relative_rect,
    clamp_rect_to_relative_bounds,
)

# Entities
from visualscene.landmark import Landmark
from visualscene.params import ObjectParam, ParamKind
from visualscene.objects import (
    Object,
    ObjectKind,
    SceneInfo,
    SCENE_TYPE_ID,
    SCENE_TRACKING_ID,
)

# Scenes
from visualscene.scene import (
    make_scene,
    is_scene,
    combine,
    compose_scene_from_processing_results,
    scene_to_normalized,
    scene_to_pixel,
    is_valid_normalized_scene,
    normalize_scene,
)

# Lookup
from visualscene.lookup import (
    get_by_type,
    get_by_type_prefix,
    get_by_tracking_id,
    get_param,
    get_param_value,
)

# Configuration
from visualscene.config import NormalizationConfig, InvalidPolicy

# Producer boundary
from visualscene.processor import Image, SceneImageProcessor, run_processors

__version__ = "0.1.0"

__all__ = [
    # Errors
    "InvalidArgumentError",
    "DimensionMismatchError",
    "CoordinateSpaceError",
    # Values
    "CoordinateSpace",
    "COORDINATE_MIN",
    "COORDINATE_MAX",
    "COORDINATE_RANGE",
    "Point3D",
    "BoundingRect",
    # Coordinate transforms
    "pixel_to_relative",
    "relative_to_pixel",
    "calculate_aspect_ratio",
    "is_valid_relative_point",
    "clamp_to_relative_bounds",
    "rect_to_relative",
    "rect_to_pixel",
    "is_valid_relative_rect",
    "clamp_rect_to_relative_bounds",
    # Entities
    "Landmark",
    "ObjectParam",
    "ParamKind",
    "Object",
    "ObjectKind",
    "SceneInfo",
    "SCENE_TYPE_ID",
    "SCENE_TRACKING_ID",
    # Scenes
    "make_scene",
    "is_scene",
    "combine",
    "compose_scene_from_processing_results",
    "scene_to_normalized",
    "scene_to_pixel",
    "is_valid_normalized_scene",
    "normalize_scene",
    # Lookup
    "get_by_type",
    "get_by_type_prefix",
    "get_by_tracking_id",
    "get_param",
    "get_param_value",
    # Configuration
    "NormalizationConfig",
    "InvalidPolicy",
    # Producer boundary
    "Image",
    "SceneImageProcessor",
    "run_processors",
]
