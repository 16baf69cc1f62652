"""Registry mapping shading type names to type tags.

The registry is an explicit name -> class mapping built once at import time from
the builtin catalog. Name lookups are case sensitive and never fail: a name that
is not registered resolves to an ``HLSLUnregisteredType`` carrying that name.
"""

from typing import Iterable, Iterator

from loguru import logger

from exsl.constants import NULL_KEYWORD
from exsl.errors import TypeRegistrationError
from exsl.types import (
    EXSLFragVSInput,
    EXSLPostProcessingVSInput,
    HLSLBool,
    HLSLDouble,
    HLSLFloat,
    HLSLFloat2,
    HLSLFloat3,
    HLSLFloat4,
    HLSLHalf,
    HLSLInt,
    HLSLNull,
    HLSLType,
    HLSLUInt,
    HLSLUnregisteredType,
)

BUILTIN_TYPES: tuple[type[HLSLType], ...] = (
    HLSLBool,
    HLSLInt,
    HLSLUInt,
    HLSLHalf,
    HLSLFloat,
    HLSLDouble,
    HLSLFloat2,
    HLSLFloat3,
    HLSLFloat4,
    HLSLNull,
    EXSLFragVSInput,
    EXSLPostProcessingVSInput,
)


class TypeRegistry:
    """Name to type-tag mapping with an unregistered-type fallback."""

    def __init__(self, types: Iterable[type[HLSLType]] = ()):
        self._types: dict[str, type[HLSLType]] = {}
        self.errors: list[TypeRegistrationError] = []
        for type_class in types:
            self.register(type_class)

    def register(self, type_class: type[HLSLType]) -> type[HLSLType]:
        """Register a type class under its canonical name.

        Can be used as a class decorator. A class without a canonical name, or
        whose name is already taken, is reported and left out of the registry.

        Args:
            type_class: Concrete ``HLSLType`` subclass

        Returns:
            The class itself
        """
        name = type_class.canonical_name()
        error = None
        if not name:
            error = TypeRegistrationError(
                f"{type_class.__name__} does not declare a canonical type name",
                type_class,
            )
        elif name in self._types and self._types[name] is not type_class:
            error = TypeRegistrationError(
                f"type name '{name}' is already registered by "
                f"{self._types[name].__name__}",
                type_class,
            )

        if error is not None:
            logger.error(error.message)
            self.errors.append(error)
            return type_class

        self._types[name] = type_class
        return type_class

    def resolve(self, name: str) -> HLSLType:
        """Create the type tag spelled ``name``.

        Args:
            name: Type name as written in shader source

        Returns:
            Default instance of the registered type, or an ``HLSLUnregisteredType``
            carrying ``name`` when no registered type has that spelling
        """
        type_class = self._types.get(name)
        if type_class is None:
            logger.debug(f"Unregistered type name: {name}")
            return HLSLUnregisteredType(name, None)
        return type_class()

    def canonical_name(self, type_: HLSLType | type[HLSLType]) -> str:
        """Get the textual name of a type tag or type class."""
        if isinstance(type_, HLSLType):
            return type_.name
        name = type_.canonical_name()
        if name is None:
            logger.error(f"{type_.__name__} does not declare a canonical type name")
            return NULL_KEYWORD
        return name

    def is_registered(self, name: str) -> bool:
        return name in self._types

    def names(self) -> list[str]:
        return list(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[type[HLSLType]]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)


DEFAULT_REGISTRY = TypeRegistry(BUILTIN_TYPES)


def resolve_type(name: str) -> HLSLType:
    """Resolve a type name against the builtin registry."""
    return DEFAULT_REGISTRY.resolve(name)


def type_name(type_: HLSLType | type[HLSLType]) -> str:
    """Get the textual name of a type tag or type class."""
    return DEFAULT_REGISTRY.canonical_name(type_)


__all__ = [
    "BUILTIN_TYPES",
    "TypeRegistry",
    "DEFAULT_REGISTRY",
    "resolve_type",
    "type_name",
]
