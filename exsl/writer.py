"""Incremental shader source writer.

``HLSLWriter`` appends text to an in-memory buffer while tracking the current
nesting ("spacing") stage, so that every new line is indented with
``spacing_stage * spaces_per_stage`` spaces. An IL-flavored writer starts its
buffer with the EXISL prologue and unlocks the ``il_*`` operations.

Examples:
    >>> writer = HLSLWriter()
    >>> writer.exsl_type(ShaderType.FRAGMENT)
    >>> with writer.method("main", return_type=HLSLFloat4):
    ...     writer.write_return(create_parameter(HLSLFloat4, "color"))
"""

from contextlib import contextmanager
from typing import Iterator, Sequence

from loguru import logger

from exsl.constants import (
    BLOCK_COMMENT_END,
    BLOCK_COMMENT_START,
    BLOCK_END,
    BLOCK_START,
    CONST_KEYWORD,
    DEFAULT_SPACES_PER_STAGE,
    DEFINE_KEYWORD,
    EXSL_SHADER_MODULE_PRAGMA,
    EXSL_STAGE_PRAGMA,
    EXSL_TYPE_PRAGMA,
    INCLUDE_KEYWORD,
    LINE_COMMENT,
    PRAGMA_KEYWORD,
    RETURN_KEYWORD,
    STATEMENT_TERMINATOR,
    STATIC_KEYWORD,
    VOID_KEYWORD,
)
from exsl.errors import BlockNestingError, EXSLError
from exsl.il import CURRENT_IL_VERSION, ILVersion, ILWriterMixin
from exsl.models import Field, Parameter
from exsl.syntax import (
    ShaderStage,
    ShaderType,
    SyntaxStyle,
    attribute_end,
    attribute_start,
    shader_stage_define,
    shader_type_define,
)
from exsl.types import HLSLType, instantiate


class HLSLWriter(ILWriterMixin):
    """Shader source writer with EXISL extension support."""

    def __init__(
        self,
        is_il: bool = False,
        syntax_style: SyntaxStyle = SyntaxStyle.CPP11,
        spaces_per_stage: int = DEFAULT_SPACES_PER_STAGE,
        version: ILVersion | tuple[int, int, int] = CURRENT_IL_VERSION,
    ):
        """Initialize the writer.

        Args:
            is_il: Write an EXISL document instead of plain shader source
            syntax_style: Bracket style of attributes
            spaces_per_stage: Indentation width of one nesting stage
            version: EXISL version written in the prologue
        """
        self._is_il = is_il
        self._syntax_style = syntax_style
        self._spaces_per_stage = spaces_per_stage
        self._spacing_stage = 0
        self._chunks: list[str] = []
        self._version = ILVersion(*version)
        self.errors: list[EXSLError] = []

        logger.debug(
            f"Creating {'EXISL' if is_il else 'HLSL'} writer "
            f"({syntax_style.name}, {spaces_per_stage} spaces per stage)"
        )

        if is_il:
            self.il_define_exisl_shader()
            self.il_define_version()

    # --- Configuration ---

    @property
    def syntax_style(self) -> SyntaxStyle:
        return self._syntax_style

    @property
    def spaces_per_stage(self) -> int:
        return self._spaces_per_stage

    @property
    def version(self) -> ILVersion:
        """EXISL version written in the prologue"""
        return self._version

    @property
    def spacing_stage(self) -> int:
        """Current nesting depth"""
        return self._spacing_stage

    # --- Buffer ---

    @property
    def data(self) -> str:
        return "".join(self._chunks)

    def get_written_data(self) -> str:
        """Get everything written so far."""
        return self.data

    def __str__(self) -> str:
        return self.data

    def write(self, text: str) -> None:
        if text:
            self._chunks.append(text)

    # --- Comments ---

    def comment(self, text: str, new_line: bool = True) -> None:
        self.write(f"{LINE_COMMENT} {text}")
        if new_line:
            self.new_line()

    def start_comments(self, text: str) -> None:
        self.write(f"{BLOCK_COMMENT_START} {text}")

    def end_comments(self) -> None:
        self.write(f" {BLOCK_COMMENT_END}")

    # --- Directives ---

    def define_macro(self, macro: str, new_line: bool = True) -> None:
        self.write(f"{DEFINE_KEYWORD} {macro}")
        if new_line:
            self.new_line()

    def pragma_directive(self, directive: str, new_line: bool = True) -> None:
        self.write(f"{PRAGMA_KEYWORD} {directive}")
        if new_line:
            self.new_line()

    def include(self, path: str, new_line: bool = True) -> None:
        self.write(f'{INCLUDE_KEYWORD} "{path}"')
        if new_line:
            self.new_line()

    def exsl_type(self, shader_type: ShaderType, new_line: bool = True) -> None:
        """Write ``#pragma EXSL_Type <type>``."""
        self.pragma_directive(
            f"{EXSL_TYPE_PRAGMA} {shader_type_define(shader_type)}", new_line
        )

    def exsl_stage(self, stage: ShaderStage, new_line: bool = True) -> None:
        """Write ``#pragma EXSL_Stage <stage>``."""
        self.pragma_directive(f"{EXSL_STAGE_PRAGMA} {shader_stage_define(stage)}", new_line)

    def exsl_shader_module(self, major: int, minor: int, new_line: bool = True) -> None:
        """Write ``#pragma EXSL_ShaderModule <major>.<minor>``."""
        self.pragma_directive(f"{EXSL_SHADER_MODULE_PRAGMA} {major}.{minor}", new_line)

    # --- Declarations ---

    def define_attribute(
        self,
        name: str,
        arguments: Sequence[Parameter | str] = (),
        new_line: bool = True,
    ) -> None:
        """Write an attribute in the writer's bracket style.

        Args:
            name: Attribute name
            arguments: Parameters (written by name) or literal argument texts
            new_line: Start a new line after the attribute
        """
        self.write(attribute_start(self._syntax_style) + name)
        if arguments:
            self.write_parameters(arguments)
        self.write(attribute_end(self._syntax_style))
        if new_line:
            self.new_line()

    def write_parameters(
        self, parameters: Sequence[Parameter | str], brackets: bool = True
    ) -> None:
        names = [p.name if isinstance(p, Parameter) else p for p in parameters]
        text = ", ".join(names)
        self.write(f"({text})" if brackets else text)

    def write_semantic(self, semantic: str) -> None:
        self.write(f" : {semantic}")

    def define_field(self, field: Field, end_line: bool = True) -> None:
        """Write ``[attributes ][static ][const ]type name[ : SEMANTIC];``."""
        for attribute in field.attributes:
            self.define_attribute(attribute.name, attribute.arguments, new_line=False)
            self.write(" ")
        if field.static:
            self.write(STATIC_KEYWORD + " ")
        if field.const:
            self.write(CONST_KEYWORD + " ")

        self.define_parameter(field.parameter, end_line=False)

        if field.semantic is not None:
            self.write_semantic(field.semantic)
        if end_line:
            self.end_line()

    def define_parameter(self, parameter: Parameter, end_line: bool = True) -> None:
        self.write(parameter.declaration())
        if end_line:
            self.end_line()

    # --- Methods ---

    def start_method(
        self,
        name: str = "main",
        parameters: Sequence[Parameter] = (),
        return_type: HLSLType | type[HLSLType] | None = None,
        static: bool = False,
    ) -> None:
        """Write a method signature and open its body.

        Args:
            name: Method name
            parameters: Method parameters
            return_type: Return type (tag or tag class), None for ``void``
            static: Prefix the signature with ``static``
        """
        if static:
            self.write(STATIC_KEYWORD + " ")

        if return_type is not None:
            self.write(instantiate(return_type).name)
        else:
            self.write(VOID_KEYWORD)

        params = ", ".join(p.declaration() for p in parameters)
        self.write(f" {name}({params})")
        self.new_line()
        self.start_block()
        self.new_line()

    def end_method(
        self, return_parameter: Parameter | None = None, new_line: bool = True
    ) -> EXSLError | None:
        """Close a method body, optionally writing ``return <name>;`` first."""
        if self._spacing_stage == 0:
            return self.report(BlockNestingError("Cannot end a method outside of a block"))

        if return_parameter is not None:
            self.write_return(return_parameter)
        self.end_block()
        if new_line:
            self.new_line()
        return None

    @contextmanager
    def method(
        self,
        name: str = "main",
        parameters: Sequence[Parameter] = (),
        return_type: HLSLType | type[HLSLType] | None = None,
        static: bool = False,
        return_parameter: Parameter | None = None,
    ) -> Iterator[None]:
        """Context manager pairing ``start_method``/``end_method``."""
        self.start_method(name, parameters, return_type, static)
        try:
            yield
        finally:
            self.end_method(return_parameter)

    def write_return(self, parameter: Parameter | None = None) -> None:
        self.write(RETURN_KEYWORD)
        if parameter is not None:
            self.write(" " + parameter.name)
        self.end_line()

    # --- Lines ---

    def end_line(self, ignore_spacing: bool = False) -> None:
        """Terminate the statement and start a new line."""
        self.terminate()
        self.new_line(1, ignore_spacing)

    def terminate(self) -> None:
        """Write the statement terminator without starting a new line."""
        self.write(STATEMENT_TERMINATOR)

    def new_line(self, count: int = 1, ignore_spacing: bool = False) -> None:
        self.write("\n" * count)
        if not ignore_spacing:
            self.write(self._indentation())

    def _indentation(self) -> str:
        return " " * (self._spacing_stage * self._spaces_per_stage)

    # --- Blocks ---

    def brackets(self) -> None:
        self.write(BLOCK_START + BLOCK_END)

    def start_block(self, keep_stage: bool = False) -> None:
        self.write(BLOCK_START)
        if not keep_stage:
            self._spacing_stage += 1

    def end_block(self, keep_stage: bool = False) -> BlockNestingError | None:
        """Close a block.

        The closing bracket is moved back to the reduced indentation when the
        current line holds nothing but indentation.

        Returns:
            None, or the reported error when there is no open block to close
        """
        if not keep_stage:
            if self._spacing_stage == 0:
                error = BlockNestingError()
                self.report(error)
                return error
            self._spacing_stage -= 1
            self._reindent_current_line()
        self.write(BLOCK_END)
        return None

    @contextmanager
    def block(self) -> Iterator[None]:
        """Context manager for a ``{ ... }`` block on its own lines."""
        self.start_block()
        self.new_line()
        try:
            yield
        finally:
            self.end_block()
            self.new_line()

    def _reindent_current_line(self) -> None:
        if len(self._chunks) < 2:
            return
        last = self._chunks[-1]
        if last.strip(" ") or not self._chunks[-2].endswith("\n"):
            return
        self._chunks.pop()
        self.write(self._indentation())


__all__ = ["HLSLWriter"]
