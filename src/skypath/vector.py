from __future__ import annotations

import numbers
from typing import Generic, Iterator, Sequence, Type, TypeVar

import numpy as np

from .errors import IncompatibleArgumentsError, UnsupportedFormatError
from .quantities import Angle, AngularVelocity, Distance, Velocity

Q = TypeVar("Q", Distance, Velocity, AngularVelocity, Angle)


class Vector3(Generic[Q]):
    """Immutable 3-vector whose components share one quantity type."""

    __slots__ = ("_values", "_kind")

    def __init__(self, x: Q, y: Q, z: Q) -> None:
        kind = type(x)
        if type(y) is not kind or type(z) is not kind:
            raise IncompatibleArgumentsError("Vector3 components must share one quantity type")
        self._kind: Type[Q] = kind
        self._values = _frozen_array([x.value, y.value, z.value])

    @classmethod
    def _from_values(cls, values: np.ndarray, kind: Type[Q]) -> "Vector3[Q]":
        vec = cls.__new__(cls)
        vec._kind = kind
        vec._values = _frozen_array(values)
        return vec

    @classmethod
    def zero(cls, kind: Type[Q]) -> "Vector3[Q]":
        return cls._from_values(np.zeros(3), kind)

    @classmethod
    def from_array(cls, values: Sequence[float], kind: Type[Q], unit: str | None = None) -> "Vector3[Q]":
        arr = np.asarray(values, dtype=float)
        if arr.shape != (3,):
            raise UnsupportedFormatError(f"Vector3 expects 3 values, got shape {arr.shape}")
        if unit is not None:
            try:
                arr = arr * kind.UNITS[unit]
            except KeyError:
                raise UnsupportedFormatError(f"Unknown {kind.__name__} unit '{unit}'") from None
        return cls._from_values(arr, kind)

    def to_array(self, unit: str | None = None) -> np.ndarray:
        if unit is None:
            return self._values.copy()
        try:
            factor = self._kind.UNITS[unit]
        except KeyError:
            raise UnsupportedFormatError(f"Unknown {self._kind.__name__} unit '{unit}'") from None
        return self._values / factor

    @property
    def kind(self) -> Type[Q]:
        return self._kind

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def x(self) -> Q:
        return self._kind(float(self._values[0]))

    @property
    def y(self) -> Q:
        return self._kind(float(self._values[1]))

    @property
    def z(self) -> Q:
        return self._kind(float(self._values[2]))

    def __iter__(self) -> Iterator[Q]:
        return iter((self.x, self.y, self.z))

    def _check_same_kind(self, other: object) -> "Vector3":
        if not isinstance(other, Vector3) or other._kind is not self._kind:
            raise IncompatibleArgumentsError(
                f"Cannot combine Vector3[{self._kind.__name__}] with {other!r}"
            )
        return other

    def __add__(self, other: "Vector3[Q]") -> "Vector3[Q]":
        other = self._check_same_kind(other)
        return Vector3._from_values(self._values + other._values, self._kind)

    def __sub__(self, other: "Vector3[Q]") -> "Vector3[Q]":
        other = self._check_same_kind(other)
        return Vector3._from_values(self._values - other._values, self._kind)

    def __neg__(self) -> "Vector3[Q]":
        return Vector3._from_values(-self._values, self._kind)

    def __mul__(self, factor: float) -> "Vector3[Q]":
        if isinstance(factor, bool) or not isinstance(factor, numbers.Real):
            return NotImplemented
        return Vector3._from_values(self._values * float(factor), self._kind)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Vector3[Q]":
        if isinstance(divisor, bool) or not isinstance(divisor, numbers.Real):
            return NotImplemented
        return Vector3._from_values(self._values / float(divisor), self._kind)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self._kind is other._kind and bool(np.array_equal(self._values, other._values))

    def __hash__(self) -> int:
        return hash((self._kind, tuple(self._values.tolist())))

    def __repr__(self) -> str:
        x, y, z = self._values
        return f"Vector3[{self._kind.__name__}]({x!r}, {y!r}, {z!r})"

    def dot(self, other: "Vector3") -> float:
        """Dot product in canonical units; kinds may differ."""
        if not isinstance(other, Vector3):
            raise IncompatibleArgumentsError(f"Cannot dot Vector3 with {other!r}")
        return float(np.dot(self._values, other._values))

    @property
    def magnitude(self) -> Q:
        return self._kind(float(np.linalg.norm(self._values)))

    def is_zero(self) -> bool:
        return not np.any(self._values)

    def unit(self) -> np.ndarray:
        """Unit direction as a plain array (zeros for the zero vector)."""
        norm = float(np.linalg.norm(self._values))
        if norm == 0.0:
            return np.zeros(3)
        return self._values / norm

    def rotate(self, matrix: np.ndarray) -> "Vector3[Q]":
        m = np.asarray(matrix, dtype=float)
        if m.shape != (3, 3):
            raise IncompatibleArgumentsError(f"rotation matrix must be 3x3, got {m.shape}")
        return Vector3._from_values(m @ self._values, self._kind)


def _frozen_array(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr
