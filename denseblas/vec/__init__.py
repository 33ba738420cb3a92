"""
Vectors.

Public API:
    create(n), make(n, x), make0(n), init(n, f)
    of_array(values), to_array(v), dim(v)

Every creation function accepts dtype= ('s', 'd', 'c', 'z' or a numpy
dtype); the default is float64.
"""

from denseblas.vec.creation import (
    create,
    dim,
    init,
    make,
    make0,
    of_array,
    to_array,
)

__all__ = [
    "create",
    "dim",
    "init",
    "make",
    "make0",
    "of_array",
    "to_array",
]
