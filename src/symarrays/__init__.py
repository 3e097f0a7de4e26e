from .arrayop import ArrayOp, arrayop
from .diagnostics import (
    DimensionMismatchError,
    ErrorCode,
    PropagationError,
    ShapeMetadataError,
    SymArrayError,
    UnknownQueryError,
    UnresolvedIndexError,
)
from .ops import apply, elementwise, index, matmul, transpose
from .propagation import (
    PROPAGATION_RULES,
    Elementwise,
    PropagationRegistry,
    build_array_term,
)
from .query import (
    IndexSpace,
    axes,
    dimension_count,
    element_type,
    index_space,
    size,
    total_length,
)
from .shape import ShapeAxes, attach_shape, make_shape, shape_of
from .symbolic import (
    ArrayType,
    Const,
    ContainerKind,
    ScalarType,
    Sym,
    Term,
    array_symbol,
    children,
    constant,
    declared_type,
    head,
    index_symbols,
    is_composite,
    render,
    scalar_symbol,
)
from .unknown import UNKNOWN, Unknown, is_unknown
from .wrapper import Arr

__all__ = [
    "PROPAGATION_RULES",
    "UNKNOWN",
    "Arr",
    "ArrayOp",
    "ArrayType",
    "Const",
    "ContainerKind",
    "DimensionMismatchError",
    "Elementwise",
    "ErrorCode",
    "IndexSpace",
    "PropagationError",
    "PropagationRegistry",
    "ScalarType",
    "ShapeAxes",
    "ShapeMetadataError",
    "Sym",
    "SymArrayError",
    "Term",
    "Unknown",
    "UnknownQueryError",
    "UnresolvedIndexError",
    "apply",
    "array_symbol",
    "arrayop",
    "attach_shape",
    "axes",
    "build_array_term",
    "children",
    "constant",
    "declared_type",
    "dimension_count",
    "element_type",
    "elementwise",
    "head",
    "index",
    "index_space",
    "index_symbols",
    "is_composite",
    "is_unknown",
    "make_shape",
    "matmul",
    "render",
    "scalar_symbol",
    "shape_of",
    "size",
    "total_length",
    "transpose",
]
