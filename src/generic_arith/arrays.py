"""JAX-backed vectors and matrices as generic-arithmetic kinds."""

from __future__ import annotations

import jax.numpy as jnp
import jax.scipy.linalg as jsl

from .kinds import ARRAY_KINDS, NUMERIC_KINDS, Kind
from .registry import Registry


def is_array(value: object) -> bool:
    return isinstance(value, jnp.ndarray)


def _is_vector(value: object) -> bool:
    return is_array(value) and value.ndim == 1


def _is_matrix(value: object) -> bool:
    return is_array(value) and value.ndim == 2


def _is_square(value: jnp.ndarray) -> bool:
    return value.ndim == 2 and value.shape[0] == value.shape[1]


def vector(*items) -> jnp.ndarray:
    return jnp.asarray(items)


def matrix(rows) -> jnp.ndarray:
    arr = jnp.asarray(rows)
    if arr.ndim != 2:
        raise ValueError(f"matrix rows must form a rank-2 array, got rank {arr.ndim}")
    return arr


def _require_same_shape(where: str, left: jnp.ndarray, right: jnp.ndarray) -> None:
    if left.shape != right.shape:
        raise ValueError(f"{where}: shape mismatch {tuple(left.shape)} vs {tuple(right.shape)}")


def _require_square(where: str, value: jnp.ndarray) -> None:
    if not _is_square(value):
        raise ValueError(f"{where} requires a square matrix, got shape {tuple(value.shape)}")


def _add(left, right):
    _require_same_shape("add", left, right)
    return left + right


def _sub(left, right):
    _require_same_shape("sub", left, right)
    return left - right


def _scale_left(scalar, arr):
    return scalar * arr


def _scale_right(arr, scalar):
    return arr * scalar


def _divide_by_scalar(arr, scalar):
    return arr / scalar


def _matmul(left, right):
    if left.shape[-1] != right.shape[0]:
        raise ValueError(f"mul: inner dimensions differ, {tuple(left.shape)} by {tuple(right.shape)}")
    return left @ right


def _invert(value):
    _require_square("invert", value)
    return jnp.linalg.inv(value)


def _divide_by_matrix(left, right):
    return _matmul(left, _invert(right))


def _divide_scalar_by_matrix(scalar, value):
    return scalar * _invert(value)


def _matrix_power(value, exponent):
    _require_square("expt", value)
    return jnp.linalg.matrix_power(value, int(exponent))


def _matrix_exp(value):
    _require_square("exp", value)
    return jsl.expm(value)


def _scalar(value):
    """Unwrap a rank-0 result into the matching Python number."""
    return value.item()


def _norm(value):
    return _scalar(jnp.linalg.norm(value))


def _dot(left, right):
    _require_same_shape("dot_product", left, right)
    return _scalar(jnp.dot(left, right))


def _inner(left, right):
    _require_same_shape("inner_product", left, right)
    return _scalar(jnp.vdot(left, right))


def _cross(left, right):
    if left.shape != (3,) or right.shape != (3,):
        raise ValueError("cross_product is defined for 3-vectors only")
    return jnp.cross(left, right)


def _determinant(value):
    _require_square("determinant", value)
    return _scalar(jnp.linalg.det(value))


def _trace(value):
    _require_square("trace", value)
    return _scalar(jnp.trace(value))


def _transpose(value):
    if value.ndim < 2:
        return value
    return jnp.swapaxes(value, -1, -2)


def _is_zero_array(value) -> bool:
    return bool(jnp.all(value == 0))


def _is_identity_matrix(value) -> bool:
    if not _is_square(value):
        return False
    return bool(jnp.array_equal(value, jnp.eye(value.shape[0], dtype=value.dtype)))


def _same_shape_array(identity, other) -> bool:
    return is_array(other) and other.shape == identity.shape


def _identity_like(value):
    _require_square("one_like", value)
    return jnp.eye(value.shape[0], dtype=value.dtype)


def install(registry: Registry) -> None:
    registry.register_kind(is_array, Kind.ARRAY)
    registry.register_kind(_is_vector, Kind.VECTOR, parent=Kind.ARRAY)
    registry.register_kind(_is_matrix, Kind.MATRIX, parent=Kind.ARRAY)

    method = registry.register_method
    for kind in ARRAY_KINDS:
        method("add", (kind, kind), _add)
        method("sub", (kind, kind), _sub)
    method("mul", (NUMERIC_KINDS, ARRAY_KINDS), _scale_left)
    method("mul", (ARRAY_KINDS, NUMERIC_KINDS), _scale_right)
    method("div", (ARRAY_KINDS, NUMERIC_KINDS), _divide_by_scalar)
    method("mul", ((Kind.MATRIX, Kind.VECTOR), Kind.MATRIX), _matmul)
    method("mul", (Kind.MATRIX, Kind.VECTOR), _matmul)
    method("div", ((Kind.MATRIX, Kind.VECTOR), Kind.MATRIX), _divide_by_matrix)
    method("div", (NUMERIC_KINDS, Kind.MATRIX), _divide_scalar_by_matrix)
    method("invert", (Kind.MATRIX,), _invert)
    method("expt", (Kind.MATRIX, Kind.INTEGRAL), _matrix_power)
    method("exp", (Kind.MATRIX,), _matrix_exp)
    method("negate", (ARRAY_KINDS,), jnp.negative)
    method("abs", (ARRAY_KINDS,), jnp.abs)
    method("real_part", (ARRAY_KINDS,), jnp.real)
    method("imag_part", (ARRAY_KINDS,), jnp.imag)
    method("conjugate", (ARRAY_KINDS,), jnp.conjugate)
    method("magnitude", (Kind.VECTOR,), _norm)

    method("transpose", (ARRAY_KINDS,), _transpose)
    method("dot_product", (Kind.VECTOR, Kind.VECTOR), _dot)
    method("inner_product", (Kind.VECTOR, Kind.VECTOR), _inner)
    method("inner_product", (Kind.MATRIX, Kind.MATRIX), _inner)
    method("outer_product", (Kind.VECTOR, Kind.VECTOR), jnp.outer)
    method("cross_product", (Kind.VECTOR, Kind.VECTOR), _cross)
    method("determinant", (Kind.MATRIX,), _determinant)
    method("trace", (Kind.MATRIX,), _trace)

    for kind in ARRAY_KINDS:
        registry.register_identity(
            kind,
            is_zero=_is_zero_array,
            is_one=_is_identity_matrix if kind is Kind.MATRIX else None,
            zero=jnp.zeros_like,
            one=_identity_like if kind is Kind.MATRIX else None,
            compatible=_same_shape_array,
        )

