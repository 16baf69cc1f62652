"""Shading type tags.

Every tag carries the canonical spelling of its type in the shading language and
a payload whose shape is fixed by the variant:

- scalar types hold a single numpy scalar,
- vector types hold a fixed-size numpy array,
- struct types hold a tuple of fields,
- unregistered types hold whatever the caller supplied (usually nothing).
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, Any, ClassVar, Sequence

import numpy as np
from loguru import logger

from exsl.constants import NULL_KEYWORD

if TYPE_CHECKING:
    from exsl.models import Field


class PayloadKind(Enum):
    """Shape of the value carried by a type tag"""

    SCALAR = auto()
    VECTOR = auto()
    STRUCT = auto()
    OPAQUE = auto()


def format_number(value: float | np.floating) -> str:
    """Format a numeric component the way it is written in shader source.

    Numpy scalars keep their precision: the shortest text that reads back to the
    same value of their dtype is used, so a float32 component survives a write
    and read cycle unchanged.
    """
    if not isinstance(value, np.floating):
        value = np.float64(value)
    return np.format_float_positional(value, trim="-")


class HLSLType:
    """Base class for all shading type tags."""

    type_name: ClassVar[str | None] = None
    kind: ClassVar[PayloadKind] = PayloadKind.OPAQUE

    def __init__(self, value: Any = None):
        name = type(self).type_name
        if name is None:
            logger.error(
                f"{type(self).__name__} does not declare a canonical type name "
                f"and cannot be used as a shading type"
            )
            name = NULL_KEYWORD
        self.name: str = name
        self.value = value

    @classmethod
    def canonical_name(cls) -> str | None:
        return cls.type_name

    def _payload_equals(self, other: HLSLType) -> bool:
        return bool(self.value == other.value)

    def same_value(self, other: HLSLType) -> bool:
        """Whether ``other`` is the same type and carries an equal payload."""
        return self == other and self._payload_equals(other)

    def __eq__(self, other: object) -> bool:
        # Tags are type identities, payloads are compared by same_value
        if not isinstance(other, HLSLType):
            return NotImplemented
        return type(self) is type(other) and self.name == other.name

    def __hash__(self) -> int:
        return hash((type(self), self.name))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


# ======================================================================================
#                                      SCALARS
# ======================================================================================


class ScalarType(HLSLType):
    """Type tag holding a single numeric value"""

    kind = PayloadKind.SCALAR
    dtype: ClassVar[type[np.generic]] = np.float32

    def __init__(self, value: float | int | bool = 0):
        super().__init__(self.dtype(value))

    def literal(self) -> str:
        if self.dtype is np.bool_:
            return "true" if self.value else "false"
        if np.issubdtype(self.dtype, np.integer):
            return str(int(self.value))
        return format_number(self.value)


class HLSLBool(ScalarType):
    type_name = "bool"
    dtype = np.bool_


class HLSLInt(ScalarType):
    type_name = "int"
    dtype = np.int32


class HLSLUInt(ScalarType):
    type_name = "uint"
    dtype = np.uint32


class HLSLHalf(ScalarType):
    type_name = "half"
    dtype = np.float16


class HLSLFloat(ScalarType):
    type_name = "float"
    dtype = np.float32


class HLSLDouble(ScalarType):
    type_name = "double"
    dtype = np.float64


class HLSLNull(ScalarType):
    type_name = "NULL"
    dtype = np.uint32

    def __init__(self):
        super().__init__(0)


# ======================================================================================
#                                      VECTORS
# ======================================================================================


class VectorType(HLSLType):
    """Type tag holding a fixed number of float components.

    Missing trailing components are zero, so ``HLSLFloat3(1)`` is ``float3(1, 0, 0)``.
    """

    kind = PayloadKind.VECTOR
    size: ClassVar[int] = 0

    def __init__(self, *components: float | Sequence[float] | np.ndarray):
        if len(components) == 1 and isinstance(components[0], (list, tuple, np.ndarray)):
            values = np.asarray(components[0], dtype=np.float32).flatten()
        else:
            values = np.asarray(components, dtype=np.float32).flatten()

        if len(values) > self.size:
            raise ValueError(
                f"Invalid input size for {type(self).__name__}. "
                f"Expected at most {self.size}, got {len(values)}"
            )

        data = np.zeros(self.size, dtype=np.float32)
        data[: len(values)] = values
        super().__init__(data)

    def _payload_equals(self, other: HLSLType) -> bool:
        return bool(np.array_equal(self.value, other.value))

    def __getitem__(self, index: int) -> float:
        return float(self.value[index])

    @property
    def x(self) -> float:
        return self[0]

    @property
    def y(self) -> float:
        return self[1]

    def to_tuple(self) -> tuple[float, ...]:
        return tuple(float(v) for v in self.value)

    def literal(self) -> str:
        """Render the vector as a constructor call, e.g. ``float2(0, 1.5)``."""
        components = ", ".join(format_number(v) for v in self.value)
        return f"{self.name}({components})"

    def __repr__(self) -> str:
        vals = ", ".join(f"{x:.3f}" for x in self.value)
        return f"{type(self).__name__}({vals})"


class HLSLFloat2(VectorType):
    type_name = "float2"
    size = 2


class HLSLFloat3(VectorType):
    type_name = "float3"
    size = 3

    @property
    def z(self) -> float:
        return self[2]


class HLSLFloat4(VectorType):
    type_name = "float4"
    size = 4

    @property
    def z(self) -> float:
        return self[2]

    @property
    def w(self) -> float:
        return self[3]


# ======================================================================================
#                                      STRUCTS
# ======================================================================================


class StructType(HLSLType):
    """Type tag holding the ordered fields of a struct"""

    kind = PayloadKind.STRUCT

    def __init__(self, fields: Sequence[Field] = ()):
        super().__init__(tuple(fields))


class EXSLFragVSInput(StructType):
    type_name = "EXSLFragVSInput"


class EXSLPostProcessingVSInput(StructType):
    type_name = "EXSLPostProcessingVSInput"


# ======================================================================================
#                                    UNREGISTERED
# ======================================================================================


class HLSLUnregisteredType(HLSLType):
    """Fallback tag for a type name that is not in the registry.

    It keeps the caller's spelling verbatim and never compares equal to a
    registered type, even when the spellings collide.
    """

    kind = PayloadKind.OPAQUE

    def __init__(self, type_name: str, value: Any = None):
        self.name = type_name
        self.value = value

    def _payload_equals(self, other: HLSLType) -> bool:
        return self.value is other.value or bool(self.value == other.value)

    def __repr__(self) -> str:
        return f"HLSLUnregisteredType({self.name!r}, {self.value!r})"


def instantiate(type_: HLSLType | type[HLSLType]) -> HLSLType:
    """Get a type tag from either a tag or a tag class (default instance)."""
    if isinstance(type_, HLSLType):
        return type_
    if isinstance(type_, type) and issubclass(type_, HLSLType):
        return type_()
    raise TypeError(f"Expected a shading type or type class, got {type(type_)}")


__all__ = [
    "PayloadKind",
    "HLSLType",
    "ScalarType",
    "VectorType",
    "StructType",
    "HLSLBool",
    "HLSLInt",
    "HLSLUInt",
    "HLSLHalf",
    "HLSLFloat",
    "HLSLDouble",
    "HLSLNull",
    "HLSLFloat2",
    "HLSLFloat3",
    "HLSLFloat4",
    "EXSLFragVSInput",
    "EXSLPostProcessingVSInput",
    "HLSLUnregisteredType",
    "format_number",
    "instantiate",
]
