"""Fixed-size vectors of half values with contiguous byte layout."""
from __future__ import annotations

from typing import Any, BinaryIO, Dict, Iterator, Sequence, Tuple, Type, Union

import numpy as np

from half_common import SIZE_IN_BYTES, Buffer, HalfError, read_exact, require_bytes
from half_packed import pack_half_bits, unpack_half_bits
from half_value import Half

COMPONENT_SETS = ("xyzw", "rgba", "stpq")

HalfLike = Union[Half, float, int]


def _as_half(value: HalfLike, strict: bool = False) -> Half:
    if isinstance(value, Half):
        return value
    return Half.from_float(value, strict)


def _component_indices(pattern: str, size: int) -> Tuple[int, ...]:
    """Resolve a swizzle pattern such as 'zyx' or 'rg' to component indices."""
    if not pattern:
        raise HalfError("Empty swizzle pattern")
    for names in COMPONENT_SETS:
        if all(ch in names for ch in pattern):
            indices = tuple(names.index(ch) for ch in pattern)
            if max(indices) >= size:
                raise HalfError(f"Swizzle '{pattern}' out of range for {size} components")
            return indices
    raise HalfError(f"Invalid swizzle '{pattern}'")


class _HalfVector:
    """Shared behavior of Vector2h, Vector3h and Vector4h."""

    __slots__ = ("_components",)

    SIZE = 0
    SIZE_IN_BYTES = 0

    def __init__(self, *components: HalfLike):
        if len(components) != self.SIZE:
            raise HalfError(
                f"{type(self).__name__} needs {self.SIZE} components, got {len(components)}"
            )
        object.__setattr__(self, "_components", tuple(_as_half(c) for c in components))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_floats(cls, *values: float, strict: bool = False):
        """Encode floats into a vector, optionally failing on precision loss."""
        return cls(*(Half.from_float(v, strict) for v in values))

    @classmethod
    def splat(cls, value: HalfLike, strict: bool = False):
        """Build a vector with every component set to value."""
        half = _as_half(value, strict)
        return cls(*([half] * cls.SIZE))

    @classmethod
    def from_array(cls, values: Any, strict: bool = False):
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        return cls.from_floats(*arr.tolist(), strict=strict)

    @classmethod
    def from_bytes(cls, buffer: Buffer, offset: int = 0):
        """Read SIZE contiguous halves starting at offset."""
        require_bytes(buffer, offset, cls.SIZE_IN_BYTES)
        bits = unpack_half_bits(buffer, cls.SIZE, offset)
        return cls(*(Half(int(b)) for b in bits))

    @classmethod
    def read_from(cls, stream: BinaryIO):
        return cls.from_bytes(read_exact(stream, cls.SIZE_IN_BYTES))

    @property
    def components(self) -> Tuple[Half, ...]:
        return self._components

    def component(self, index: int) -> Half:
        if index < 0 or index >= self.SIZE:
            raise HalfError(f"Component index {index} out of range for {self.SIZE} components")
        return self._components[index]

    def with_component(self, index: int, value: HalfLike):
        """Return a copy with one component replaced."""
        self.component(index)
        parts = list(self._components)
        parts[index] = _as_half(value)
        return type(self)(*parts)

    def swizzle(self, pattern: str) -> Union[Half, "_HalfVector"]:
        """Read components in the order named by pattern."""
        indices = _component_indices(pattern, self.SIZE)
        parts = [self._components[i] for i in indices]
        if len(parts) == 1:
            return parts[0]
        if len(parts) not in VECTOR_TYPES:
            raise HalfError(f"Swizzle '{pattern}' longer than 4 components")
        return VECTOR_TYPES[len(parts)](*parts)

    @property
    def x(self) -> Half:
        return self.component(0)

    @property
    def y(self) -> Half:
        return self.component(1)

    def to_floats(self) -> Tuple[float, ...]:
        return tuple(c.to_float() for c in self._components)

    def to_array(self) -> np.ndarray:
        return np.array(self.to_floats(), dtype=np.float32)

    def to_bytes(self) -> bytes:
        return pack_half_bits([c.bits for c in self._components])

    def write_to(self, stream: BinaryIO) -> None:
        stream.write(self.to_bytes())

    def __iter__(self) -> Iterator[Half]:
        return iter(self._components)

    def __len__(self) -> int:
        return self.SIZE

    def __getitem__(self, index: int) -> Half:
        return self._components[index]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._components == other._components

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._components))

    def __str__(self) -> str:
        return "(" + ", ".join(str(c) for c in self._components) + ")"

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self}"


class Vector2h(_HalfVector):
    """2-component half vector, 4 bytes."""

    __slots__ = ()
    SIZE = 2
    SIZE_IN_BYTES = 2 * SIZE_IN_BYTES


class Vector3h(_HalfVector):
    """3-component half vector, 6 bytes."""

    __slots__ = ()
    SIZE = 3
    SIZE_IN_BYTES = 3 * SIZE_IN_BYTES

    @property
    def z(self) -> Half:
        return self.component(2)


class Vector4h(_HalfVector):
    """4-component half vector, 8 bytes."""

    __slots__ = ()
    SIZE = 4
    SIZE_IN_BYTES = 4 * SIZE_IN_BYTES

    @property
    def z(self) -> Half:
        return self.component(2)

    @property
    def w(self) -> Half:
        return self.component(3)


VECTOR_TYPES: Dict[int, Type[_HalfVector]] = {2: Vector2h, 3: Vector3h, 4: Vector4h}


def vector_type(size: int) -> Type[_HalfVector]:
    """Return the half vector class holding size components."""
    if size not in VECTOR_TYPES:
        raise HalfError(f"No half vector with {size} components")
    return VECTOR_TYPES[size]


def pack_vectors(vectors: Sequence[_HalfVector]) -> bytes:
    """Pack vectors back to back with no padding."""
    return b"".join(v.to_bytes() for v in vectors)
