"""Line-by-line shader source reader.

``HLSLReader`` walks an in-memory source text one line at a time. Each line read
is stripped of comments, classified into a ``ContextType`` and kept as the
current line, which the ``get_*`` extraction operations then query.

Classification is a pure function of the line text (and of the attribute
syntax style): nothing is carried over from previous lines.
"""

import io
import re
from typing import Iterator

from loguru import logger

from exsl.constants import (
    ATTRIBUTE_START_C,
    ATTRIBUTE_START_CPP11,
    DEFINE_KEYWORD,
    IL_ATTRIBUTE_START,
    IL_COMMENT_NODE_KEY,
    IL_DEFINE_KEYWORD,
    IL_KEYWORD,
    IL_NODE_KEY,
    IL_PROPERTY_START,
    IL_VERSION_KEYWORD,
    INCLUDE_KEYWORD,
    PRAGMA_KEYWORD,
    RETURN_KEYWORD,
    STATEMENT_TERMINATOR,
    STATIC_KEYWORD,
    VOID_KEYWORD,
)
from exsl.errors import EXSLError
from exsl.il import ILReaderMixin
from exsl.models import Attribute, MethodSignature, Parameter
from exsl.registry import DEFAULT_REGISTRY, TypeRegistry
from exsl.syntax import ContextType, SyntaxStyle, attribute_end, attribute_start

# String literals are matched first so that comment markers inside them survive
COMMENT_PATTERN = re.compile(r'("(?:\\.|[^"\\])*")|//.*$|/\*.*?\*/')

PRAGMA_PATTERN = re.compile(r"^\s*" + PRAGMA_KEYWORD + r"\s+(.*)$")
INCLUDE_PATTERN = re.compile(
    r"^\s*" + INCLUDE_KEYWORD + r'\s+(?:"(?P<quoted>[^"]*)"|<(?P<system>[^>]*)>)'
)
DEFINE_PATTERN = re.compile(
    r"^\s*" + DEFINE_KEYWORD + r"\s+(?P<name>\w+(?:\([^)]*\))?)(?:\s+(?P<value>.*))?$"
)
METHOD_PATTERN = re.compile(
    r"^\s*(?:(?P<static>" + STATIC_KEYWORD + r")\s+)?"
    r"(?:@(?P<tag>[\w.]+)\s+)?"
    r"(?P<return_type>\w+)\s+(?P<name>\w+)\s*\((?P<parameters>[^)]*)\)"
)
METHOD_START_PATTERN = re.compile(
    r"^(?:" + STATIC_KEYWORD + r"\s+)?(?P<return_type>\w+)\s+\w+\s*\([^)]*\)\s*\{?$"
)

# Words that can precede a parenthesis without declaring a method
STATEMENT_KEYWORDS = frozenset({RETURN_KEYWORD, "else", "case", "typedef"})

IL_NODE_TOKEN = IL_PROPERTY_START + IL_NODE_KEY
IL_COMMENT_NODE_TOKEN = IL_PROPERTY_START + IL_COMMENT_NODE_KEY
IL_DEFINE_TOKEN = IL_PROPERTY_START + IL_DEFINE_KEYWORD
IL_VERSION_TOKEN = IL_PROPERTY_START + IL_VERSION_KEYWORD


def strip_comments(line: str) -> str:
    """Remove ``//`` and single-line ``/* */`` comments outside string literals."""
    return COMMENT_PATTERN.sub(lambda match: match.group(1) or "", line)


def classify_line(line: str, syntax_style: SyntaxStyle = SyntaxStyle.CPP11) -> ContextType:
    """Classify a single line from its first token.

    Args:
        line: Source line, comments already stripped
        syntax_style: Attribute bracket style of the document

    Returns:
        The context of the line, ``ContextType.NONE`` when nothing matches
    """
    stripped = line.strip()
    if not stripped:
        return ContextType.NONE

    words = stripped.split(maxsplit=1)
    token = words[0]

    if token == STATIC_KEYWORD and len(words) > 1:
        if words[1].split(maxsplit=1)[0] == IL_NODE_TOKEN:
            return ContextType.IL_NODE_START

    opener = attribute_start(syntax_style)
    if token.startswith(IL_ATTRIBUTE_START + opener):
        return ContextType.IL_ATTRIBUTE
    if token.startswith(opener):
        return ContextType.ATTRIBUTE

    match token:
        case "#pragma":
            return ContextType.PRAGMA
        case "#define":
            return ContextType.DEFINE_START
        case "#include":
            return ContextType.INCLUDE
        case "$IL" | "$IL;":
            return ContextType.IL
        case "}" | "};":
            return ContextType.METHOD_END

    if token == IL_NODE_TOKEN:
        return ContextType.IL_NODE_START
    if token.startswith(IL_COMMENT_NODE_TOKEN + "("):
        return ContextType.IL_COMMENT_NODE_START
    if token == IL_DEFINE_TOKEN or token.startswith(IL_VERSION_TOKEN + "("):
        return ContextType.IL_DEFINE

    signature = METHOD_START_PATTERN.match(stripped)
    if signature and signature.group("return_type") not in STATEMENT_KEYWORDS:
        return ContextType.METHOD_START

    return ContextType.NONE


def detect_syntax_style(data: str) -> SyntaxStyle:
    """Guess the attribute style of a document, CPP11 when it has no attributes."""
    found_c = False
    for line in data.splitlines():
        stripped = strip_comments(line).strip()
        if stripped.startswith(ATTRIBUTE_START_CPP11) or stripped.startswith(
            IL_ATTRIBUTE_START + ATTRIBUTE_START_CPP11
        ):
            return SyntaxStyle.CPP11
        if stripped.startswith(ATTRIBUTE_START_C) or stripped.startswith(
            IL_ATTRIBUTE_START + ATTRIBUTE_START_C
        ):
            found_c = True
    return SyntaxStyle.C if found_c else SyntaxStyle.CPP11


def detect_is_il(data: str) -> bool:
    """Whether the first non-blank line of a document is the IL marker."""
    for line in data.splitlines():
        stripped = strip_comments(line).strip()
        if stripped:
            return stripped.rstrip(STATEMENT_TERMINATOR).strip() == IL_KEYWORD
    return False


def _split_arguments(text: str) -> tuple[str, ...]:
    """Split an argument list on commas that are not nested in parentheses."""
    arguments = []
    depth = 0
    current = []
    for char in text:
        if char == "," and depth == 0:
            arguments.append("".join(current).strip())
            current = []
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        current.append(char)
    tail = "".join(current).strip()
    if tail or arguments:
        arguments.append(tail)
    return tuple(arguments)


class HLSLReader(ILReaderMixin):
    """Shader source reader with EXISL extension support."""

    def __init__(
        self,
        data: str,
        syntax_style: SyntaxStyle | None = SyntaxStyle.CPP11,
        is_il: bool | None = None,
        trim: bool = True,
        remove_comments: bool = True,
        registry: TypeRegistry = DEFAULT_REGISTRY,
    ):
        """Initialize the reader.

        Args:
            data: Complete source text
            syntax_style: Attribute bracket style, None to detect it from ``data``
            is_il: Whether ``data`` is an EXISL document, None to detect it
            trim: Strip surrounding whitespace of each line read
            remove_comments: Strip comments of each line read
            registry: Registry used to resolve type names
        """
        self._stream = io.StringIO(data)
        self._syntax_style = (
            syntax_style if syntax_style is not None else detect_syntax_style(data)
        )
        self._is_il = is_il if is_il is not None else detect_is_il(data)
        self._trim = trim
        self._remove_comments = remove_comments
        self._finished = False
        self.registry = registry
        self.current_line: str | None = None
        self.current_context = ContextType.NONE
        self.line_number = 0
        self.errors: list[EXSLError] = []

    @property
    def syntax_style(self) -> SyntaxStyle:
        return self._syntax_style

    @property
    def trim(self) -> bool:
        return self._trim

    @property
    def remove_comments(self) -> bool:
        return self._remove_comments

    @property
    def finished(self) -> bool:
        """Whether the end of the input has been reached"""
        return self._finished

    # --- Reading ---

    def read(
        self,
        trim: bool | None = None,
        remove_comments: bool | None = None,
        update_context: bool = True,
    ) -> str | None:
        """Advance to the next line.

        Args:
            trim: Override the reader's trimming setting for this line
            remove_comments: Override the reader's comment setting for this line
            update_context: Classify the new line

        Returns:
            The new current line, or None at the end of the input
        """
        raw = self._stream.readline()
        if not raw:
            self._finished = True
            self.current_line = None
            self.current_context = ContextType.NONE
            return None

        self.line_number += 1
        line = raw.rstrip("\n").rstrip("\r")

        if remove_comments is None:
            remove_comments = self._remove_comments
        if trim is None:
            trim = self._trim

        if remove_comments:
            line = strip_comments(line)
        if trim:
            line = line.strip()

        self.current_line = line
        if update_context:
            self.current_context = self.classify(line)
        return line

    def lines(self) -> Iterator[str]:
        """Read the remaining lines one by one."""
        while (line := self.read()) is not None:
            yield line

    def classify(self, line: str) -> ContextType:
        return classify_line(line, self._syntax_style)

    # --- Extraction ---

    def get_pragma(self) -> list[str] | None:
        """Get the words after ``#pragma``."""
        if self.current_line is None:
            return None
        match = PRAGMA_PATTERN.match(self.current_line)
        if match:
            words = match.group(1).split()
            if words:
                return words
        return None

    def get_include(self) -> str | None:
        """Get the path after ``#include``."""
        if self.current_line is None:
            return None
        match = INCLUDE_PATTERN.match(self.current_line)
        if match:
            if match.group("quoted") is not None:
                return match.group("quoted")
            return match.group("system")
        return None

    def get_define(self) -> tuple[str, str | None] | None:
        """Get the macro name and (optional) value of a ``#define`` line."""
        if self.current_line is None:
            return None
        match = DEFINE_PATTERN.match(self.current_line)
        if match:
            value = match.group("value")
            return match.group("name"), value.strip() if value else None
        return None

    def get_attribute(self) -> Attribute | None:
        """Get the name and arguments of an attribute line."""
        if self.current_line is None:
            return None
        opener = re.escape(attribute_start(self._syntax_style))
        closer = re.escape(attribute_end(self._syntax_style))
        pattern = (
            r"^\s*(?:" + IL_ATTRIBUTE_START + r")?" + opener
            + r"(?P<name>\w+)(?:\((?P<arguments>.*)\))?" + closer
        )
        match = re.match(pattern, self.current_line)
        if not match:
            return None
        arguments = match.group("arguments")
        return Attribute(match.group("name"), _split_arguments(arguments or ""))

    def get_method(self) -> MethodSignature | None:
        """Get the signature declared on the current line.

        Works for plain method lines (``float4 main(float2 uv)``) and for node
        lines (``@IL.Node float4 main(float2 uv)``). Parameter types are resolved
        through the registry, unknown names become unregistered types.
        """
        if self.current_line is None:
            return None

        match = METHOD_PATTERN.match(self.current_line)
        if not match:
            logger.debug(f"No method signature on line {self.line_number}")
            return None

        return_type_name = match.group("return_type")
        if return_type_name in STATEMENT_KEYWORDS:
            return None
        return_type = None
        if return_type_name != VOID_KEYWORD:
            return_type = self.registry.resolve(return_type_name)

        parameters = self._parse_parameters(match.group("parameters"))
        if parameters is None:
            return None

        return MethodSignature(
            name=match.group("name"),
            return_type=return_type,
            parameters=parameters,
            static=match.group("static") is not None,
        )

    def _parse_parameters(self, text: str) -> tuple[Parameter, ...] | None:
        parameters = []
        for declaration in text.split(","):
            # Drop semantics such as ": TEXCOORD0"
            words = declaration.split(":")[0].split()
            if not words:
                continue
            if len(words) == 1:
                if words[0] == VOID_KEYWORD:
                    continue
                logger.debug(f"Malformed parameter declaration: {declaration!r}")
                return None
            type_name, name = words[-2], words[-1]
            parameters.append(Parameter(self.registry.resolve(type_name), name))
        return tuple(parameters)


__all__ = [
    "HLSLReader",
    "strip_comments",
    "classify_line",
    "detect_syntax_style",
    "detect_is_il",
]
