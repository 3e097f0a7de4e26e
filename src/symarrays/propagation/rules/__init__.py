import operator

import numpy as np

from ..registry import PropagationRegistry
from .elementwise import (
    ELEMENTWISE_OPERATORS,
    Elementwise,
    broadcast_axes,
    elementwise_ndims,
    elementwise_shape,
    operand_rank,
)
from .linalg import matmul_ndims, matmul_shape, transpose_ndims, transpose_shape


def register_builtin_rules(registry: PropagationRegistry) -> PropagationRegistry:
    """Register elementwise, matmul, and transpose rules into `registry`."""
    for op in ELEMENTWISE_OPERATORS:
        registry.register(op, ndims=elementwise_ndims, shape=elementwise_shape)
    registry.register(Elementwise, ndims=elementwise_ndims, shape=elementwise_shape)
    registry.register(
        operator.matmul, ndims=matmul_ndims, shape=matmul_shape, arity=2
    )
    registry.register(
        np.transpose, ndims=transpose_ndims, shape=transpose_shape, arity=1
    )
    return registry


__all__ = [
    "ELEMENTWISE_OPERATORS",
    "Elementwise",
    "broadcast_axes",
    "elementwise_ndims",
    "elementwise_shape",
    "matmul_ndims",
    "matmul_shape",
    "operand_rank",
    "register_builtin_rules",
    "transpose_ndims",
    "transpose_shape",
]
