from .build import PROPAGATION_RULES, build_array_term
from .container import (
    combine_container_kinds,
    container_kind,
    fold_container_kinds,
    propagate_container,
)
from .eltype import (
    element_type,
    join_element_types,
    promote_scalar_operands,
    propagate_eltype,
)
from .registry import NdimsRule, PropagationRegistry, ShapeRule
from .rules import Elementwise, register_builtin_rules

__all__ = [
    "PROPAGATION_RULES",
    "Elementwise",
    "NdimsRule",
    "PropagationRegistry",
    "ShapeRule",
    "build_array_term",
    "combine_container_kinds",
    "container_kind",
    "element_type",
    "fold_container_kinds",
    "join_element_types",
    "promote_scalar_operands",
    "propagate_container",
    "propagate_eltype",
    "register_builtin_rules",
]
