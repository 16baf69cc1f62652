"""
Data models for the EXSL shader tools.

This module contains the dataclass definitions used by the writer and the reader
to describe parameters, fields, attributes and method signatures.
"""

from dataclasses import dataclass, field

from exsl.types import HLSLType, instantiate


@dataclass(frozen=True)
class Parameter:
    """Typed, named parameter of a field or a method signature.

    Attributes:
        type: Shading type of the parameter
        name: Parameter name
    """

    type: HLSLType
    name: str

    def declaration(self) -> str:
        """Get the ``type name`` text of the parameter."""
        return f"{self.type.name} {self.name}"


@dataclass(frozen=True)
class Attribute:
    """Attribute attached to a declaration.

    Attributes:
        name: Attribute name, e.g. ``numthreads``
        arguments: Argument texts written between parentheses after the name
    """

    name: str
    arguments: tuple[str, ...] = ()


@dataclass(frozen=True)
class Field:
    """Field declaration.

    Attributes:
        parameter: Type and name of the field
        const: Whether the field is declared ``const``
        static: Whether the field is declared ``static``
        semantic: Optional semantic binding, e.g. ``SV_POSITION``
        attributes: Attributes written before the declaration
    """

    parameter: Parameter
    const: bool = False
    static: bool = False
    semantic: str | None = None
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class MethodSignature:
    """Signature of a method or a node.

    Attributes:
        name: Method name
        return_type: Return type, or None for ``void``
        parameters: Ordered parameters
        static: Whether the method is declared ``static``
    """

    name: str = "main"
    return_type: HLSLType | None = None
    parameters: tuple[Parameter, ...] = field(default_factory=tuple)
    static: bool = False


def create_parameter(type_: HLSLType | type[HLSLType], name: str) -> Parameter:
    """Create a parameter from a type tag or a type class."""
    return Parameter(instantiate(type_), name)


def create_field(
    type_: HLSLType | type[HLSLType],
    name: str,
    const: bool = False,
    static: bool = False,
    semantic: str | None = None,
    *attributes: Attribute,
) -> Field:
    """Create a field from a type tag or a type class."""
    return Field(create_parameter(type_, name), const, static, semantic, attributes)


__all__ = [
    "Parameter",
    "Attribute",
    "Field",
    "MethodSignature",
    "create_parameter",
    "create_field",
]
