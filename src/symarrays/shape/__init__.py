from .metadata import attach_shape, has_shape, shape_of
from .resolve import AxisOccurrence, IndexUsageMap, collect_index_usage
from .unify import check_index_consistency, make_shape
from .value import SCALAR_SHAPE, Shape, ShapeAxes, coerce_shape, is_known_shape

__all__ = [
    "SCALAR_SHAPE",
    "AxisOccurrence",
    "IndexUsageMap",
    "Shape",
    "ShapeAxes",
    "attach_shape",
    "check_index_consistency",
    "coerce_shape",
    "collect_index_usage",
    "has_shape",
    "is_known_shape",
    "make_shape",
    "shape_of",
]
