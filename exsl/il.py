"""EXISL: the ExtremeEngine intermediate shader language extension.

EXISL documents are regular shader source with a small IL-only vocabulary on top:

    $IL;
    // Defines that the file is in the ExtremeEngine intermediate shader ...
    @IL.ILVersion("1.0.0");
    @IL[[NodeProperties(float2(0, 0), float2(1, 1))]]
    @IL.Node float4 main(float2 uv)
    {
        ...
    }
    @IL.CommentNode("Header", "Comment text");

Every IL operation of a writer or a reader is gated on the document being
IL-flavored. On a plain document the operation does nothing and reports an
``ILOperationError``.
"""

import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Sequence

from loguru import logger

from exsl.constants import (
    EXISL_VERSION,
    IL_ATTRIBUTE_START,
    IL_COMMENT_NODE_KEY,
    IL_DEFINE_KEYWORD,
    IL_KEYWORD,
    IL_MARKER_COMMENT,
    IL_NODE_KEY,
    IL_NODE_PROPERTIES_KEY,
    IL_PROPERTY_START,
    IL_VERSION_KEYWORD,
    STATEMENT_TERMINATOR,
    STATIC_KEYWORD,
)
from exsl.errors import EXSLError, ILOperationError
from exsl.models import MethodSignature, Parameter
from exsl.types import HLSLFloat2, HLSLType

VERSION_PATTERN = re.compile(IL_VERSION_KEYWORD + r'\("(\d+)\.(\d+)\.(\d+)"\)')
NODE_LINE_PATTERN = re.compile(
    r"^\s*(?:" + STATIC_KEYWORD + r"\s+)?" + re.escape(IL_PROPERTY_START + IL_NODE_KEY) + r"\s"
)
COMMENT_NODE_PATTERN = re.compile(
    re.escape(IL_PROPERTY_START + IL_COMMENT_NODE_KEY)
    + r'\(\s*"(?P<header>(?:\\.|[^"\\])*)"\s*,\s*"(?P<comment>(?:\\.|[^"\\])*)"\s*\)'
)
ESCAPE_PATTERN = re.compile(r"\\(.)")
NODE_PROPERTIES_PATTERN = re.compile(
    re.escape(IL_NODE_PROPERTIES_KEY)
    + r"\(\s*float2\((?P<position>[^)]*)\)\s*,\s*float2\((?P<scale>[^)]*)\)\s*\)"
)


class ILVersion(NamedTuple):
    """Version triple written in the ``@IL.ILVersion`` line"""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


CURRENT_IL_VERSION = ILVersion(*EXISL_VERSION)


@dataclass(frozen=True, eq=False)
class Properties:
    """Position and scale of a node in the visual shader graph.

    Two properties are equal when their components are, unlike the type tags
    they are made of.
    """

    position: HLSLFloat2 = field(default_factory=lambda: HLSLFloat2(0, 0))
    scale: HLSLFloat2 = field(default_factory=lambda: HLSLFloat2(1, 1))

    def to_tuple(self) -> tuple[tuple[float, ...], tuple[float, ...]]:
        return self.position.to_tuple(), self.scale.to_tuple()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Properties):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __hash__(self) -> int:
        return hash(self.to_tuple())


@dataclass(frozen=True)
class Node:
    """Method declared as a node of the shader graph."""

    method: MethodSignature
    properties: Properties = field(default_factory=Properties)


@dataclass(frozen=True)
class CommentNode:
    """Documentation-only node of the shader graph."""

    header: str
    comment: str
    properties: Properties = field(default_factory=Properties)


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _unescape(text: str) -> str:
    return ESCAPE_PATTERN.sub(r"\1", text)


def _parse_float2(text: str) -> HLSLFloat2:
    components = [float(c) for c in text.split(",") if c.strip()]
    return HLSLFloat2(components)


class ILDocument:
    """Error bookkeeping and the IL gate shared by writers and readers."""

    _is_il: bool
    errors: list[EXSLError]

    @property
    def is_il(self) -> bool:
        """Whether this document is IL-flavored (fixed at construction)"""
        return self._is_il

    def report(self, error: EXSLError) -> EXSLError:
        """Log an error and record it on this document."""
        logger.error(error.message)
        self.errors.append(error)
        return error

    def require_il(self, operation: str) -> ILOperationError | None:
        """Return None if IL operations are allowed, otherwise report an error."""
        if self._is_il:
            return None
        error = ILOperationError(operation)
        self.report(error)
        return error


class ILWriterMixin(ILDocument):
    """IL-only emission operations of ``HLSLWriter``."""

    _version: ILVersion

    def il_define_exisl_shader(self, new_line: bool = True) -> ILOperationError | None:
        """Write the IL marker line followed by its explanatory comment."""
        error = self.require_il("il_define_exisl_shader")
        if error:
            return error

        self.write(IL_KEYWORD)
        self.end_line()
        self.comment(IL_MARKER_COMMENT, new_line)
        return None

    def il_define_version(self, end_line: bool = True) -> ILOperationError | None:
        """Write ``@IL.ILVersion("<major>.<minor>.<patch>")``."""
        error = self.require_il("il_define_version")
        if error:
            return error

        self.il_write(f'{IL_VERSION_KEYWORD}("{self._version}")')
        if end_line:
            self.end_line()
        return None

    def il_write(self, text: str) -> ILOperationError | None:
        error = self.require_il("il_write")
        if error:
            return error

        self.write(IL_PROPERTY_START + text)
        return None

    def il_define(self, text: str) -> ILOperationError | None:
        error = self.require_il("il_define")
        if error:
            return error

        self.il_write(f"{IL_DEFINE_KEYWORD} {text}")
        return None

    def il_node_properties_attribute(
        self, properties: Properties, new_line: bool = True
    ) -> ILOperationError | None:
        """Write the position/scale attribute that precedes a node declaration."""
        error = self.require_il("il_node_properties_attribute")
        if error:
            return error

        self.write(IL_ATTRIBUTE_START)
        self.define_attribute(
            IL_NODE_PROPERTIES_KEY,
            [properties.position.literal(), properties.scale.literal()],
            new_line=new_line,
        )
        return None

    def il_start_node_method(
        self,
        name: str = "main",
        parameters: Sequence[Parameter] = (),
        return_type: HLSLType | type[HLSLType] | None = None,
        static: bool = False,
        properties: Properties | None = None,
    ) -> ILOperationError | None:
        """Write a node declaration and open its body.

        Args:
            name: Node method name
            parameters: Node parameters
            return_type: Return type, None for ``void``
            static: Prefix the declaration with ``static``
            properties: Graph placement, written as an attribute line when given
        """
        error = self.require_il("il_start_node_method")
        if error:
            return error

        if properties is not None:
            self.il_node_properties_attribute(properties)

        if static:
            self.write(STATIC_KEYWORD + " ")

        self.il_write(IL_NODE_KEY + " ")
        self.start_method(name, parameters, return_type)
        return None

    def il_end_node_method(
        self, return_parameter: Parameter | None = None, new_line: bool = True
    ) -> EXSLError | None:
        error = self.require_il("il_end_node_method")
        if error:
            return error

        return self.end_method(return_parameter, new_line)

    @contextmanager
    def il_node(
        self,
        name: str = "main",
        parameters: Sequence[Parameter] = (),
        return_type: HLSLType | type[HLSLType] | None = None,
        static: bool = False,
        properties: Properties | None = None,
        return_parameter: Parameter | None = None,
    ) -> Iterator[None]:
        """Context manager pairing ``il_start_node_method``/``il_end_node_method``."""
        if self.il_start_node_method(name, parameters, return_type, static, properties):
            yield
            return
        try:
            yield
        finally:
            self.il_end_node_method(return_parameter)

    def il_write_node(self, node: Node) -> ILOperationError | None:
        """Write the declaration of ``node`` and open its body."""
        method = node.method
        return self.il_start_node_method(
            method.name,
            method.parameters,
            method.return_type,
            method.static,
            node.properties,
        )

    def il_define_comment_node(
        self,
        header: str | None,
        comment: str,
        properties: Properties | None = None,
    ) -> ILOperationError | None:
        """Write ``@IL.CommentNode("<header>", "<comment>");``.

        Quotes and backslashes in ``header`` and ``comment`` are escaped with a
        backslash.
        """
        error = self.require_il("il_define_comment_node")
        if error:
            return error

        if properties is not None:
            self.il_node_properties_attribute(properties)

        self.il_write(
            f'{IL_COMMENT_NODE_KEY}("{_escape(header or "")}", "{_escape(comment)}")'
        )
        self.end_line()
        return None


class ILReaderMixin(ILDocument):
    """IL-only extraction operations of ``HLSLReader``."""

    current_line: str | None

    def get_is_il(self) -> bool:
        """Whether the current line is the IL marker."""
        if self.current_line is None:
            return False
        return self.current_line.strip().rstrip(STATEMENT_TERMINATOR).strip() == IL_KEYWORD

    def get_il_version(self) -> ILVersion | None:
        """Extract the version of an ``@IL.ILVersion("x.y.z")`` line."""
        if self.require_il("get_il_version") or self.current_line is None:
            return None

        match = VERSION_PATTERN.search(self.current_line)
        if match:
            return ILVersion(*(int(group) for group in match.groups()))
        return None

    def get_il_node(self) -> Node | None:
        """Extract the signature of an ``@IL.Node`` declaration line.

        The node carries default properties: placement is written on the
        preceding attribute line, see ``get_il_node_properties``.
        """
        if self.require_il("get_il_node") or self.current_line is None:
            return None

        if not NODE_LINE_PATTERN.match(self.current_line):
            return None

        method = self.get_method()
        if method is None:
            return None
        return Node(method)

    def get_il_node_properties(self) -> Properties | None:
        """Extract position/scale from an ``@IL[[NodeProperties(...)]]`` line."""
        if self.require_il("get_il_node_properties") or self.current_line is None:
            return None

        match = NODE_PROPERTIES_PATTERN.search(self.current_line)
        if not match:
            return None
        try:
            return Properties(
                _parse_float2(match.group("position")),
                _parse_float2(match.group("scale")),
            )
        except ValueError:
            logger.debug(f"Malformed node properties: {self.current_line}")
            return None

    def get_il_comment_node(self) -> CommentNode | None:
        """Extract header and comment of an ``@IL.CommentNode(...)`` line."""
        if self.require_il("get_il_comment_node") or self.current_line is None:
            return None

        match = COMMENT_NODE_PATTERN.search(self.current_line)
        if match:
            return CommentNode(
                _unescape(match.group("header")), _unescape(match.group("comment"))
            )
        return None


__all__ = [
    "ILVersion",
    "CURRENT_IL_VERSION",
    "Properties",
    "Node",
    "CommentNode",
    "ILDocument",
    "ILWriterMixin",
    "ILReaderMixin",
]
