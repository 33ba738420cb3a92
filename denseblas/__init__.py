"""
denseblas: dense matrices over native BLAS.

Exposes matrix and vector operations on column-major numpy arrays,
forwarding the numerical work to the BLAS library scipy links against,
plus a build-time probe selecting BLAS/LAPACK compiler and linker flags.

Submodules:
    mat: Matrix creation, transformations, arithmetic and iterators
    vec: Vector creation
    config: Build configuration probe
"""

__version__ = "0.1.0"

from denseblas import mat
from denseblas import vec
from denseblas.core.exceptions import (
    DenseBLASError,
    ValidationError,
    DimensionError,
    ConfigurationError,
    NativeCallError,
)

__all__ = [
    "__version__",
    "mat",
    "vec",
    "DenseBLASError",
    "ValidationError",
    "DimensionError",
    "ConfigurationError",
    "NativeCallError",
]
