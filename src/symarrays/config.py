"""
Configuration constants for shape and type inference.
"""

import numpy as np

# Element type of an array term with no array-typed operands
DEFAULT_ELEMENT_TYPE = np.dtype("float64")

# Element type of index symbols
INDEX_ELEMENT_TYPE = np.dtype("int64")

# Axis of a dimension past an array's rank, and of integer output indices
TRIVIAL_AXIS = range(0, 1)

# Text used for the anonymous output array when rendering array ops
ARRAYOP_OUTPUT_NAME = "_"
