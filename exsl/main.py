"""Command line interface for exsl.

This module provides a command-line interface to inspect shader sources line by
line and to scaffold new EXISL or plain shader documents.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import typer
from loguru import logger

from exsl.constants import IL_FORMAT
from exsl.il import CURRENT_IL_VERSION, Properties
from exsl.models import MethodSignature, create_parameter
from exsl.reader import HLSLReader
from exsl.syntax import ContextType, ShaderStage, ShaderType, SyntaxStyle
from exsl.types import HLSLFloat2, HLSLFloat4
from exsl.writer import HLSLWriter

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])


def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="exsl",
    help=(
        "Read and write EXSL shader sources and EXISL documents. "
        "Commands: inspect, new, version."
    ),
    add_completion=False,
)


def _parse_style(style: str) -> SyntaxStyle | None:
    """Map a --style option to a syntax style, None meaning auto-detection."""
    match style.lower():
        case "auto":
            return None
        case "c":
            return SyntaxStyle.C
        case "cpp11":
            return SyntaxStyle.CPP11
    raise typer.BadParameter(f"Unknown syntax style: {style} (expected auto, c, cpp11)")


def _describe_line(reader: HLSLReader) -> str:
    """Get the extracted data of the current line as display text."""
    match reader.current_context:
        case ContextType.PRAGMA:
            return " ".join(reader.get_pragma() or [])
        case ContextType.INCLUDE:
            return reader.get_include() or ""
        case ContextType.DEFINE_START:
            define = reader.get_define()
            return define[0] if define else ""
        case ContextType.ATTRIBUTE:
            attribute = reader.get_attribute()
            return attribute.name if attribute else ""
        case ContextType.METHOD_START:
            method = reader.get_method()
            return _format_signature(method) if method else ""
        case ContextType.IL_DEFINE if reader.is_il:
            version = reader.get_il_version()
            return f"version {version}" if version else ""
        case ContextType.IL_ATTRIBUTE if reader.is_il:
            properties = reader.get_il_node_properties()
            if properties is None:
                return ""
            return f"position {properties.position.literal()} scale {properties.scale.literal()}"
        case ContextType.IL_NODE_START if reader.is_il:
            node = reader.get_il_node()
            return _format_signature(node.method) if node else ""
        case ContextType.IL_COMMENT_NODE_START if reader.is_il:
            comment_node = reader.get_il_comment_node()
            return f"{comment_node.header}: {comment_node.comment}" if comment_node else ""
    return ""


def _format_signature(method: MethodSignature) -> str:
    return_type = method.return_type.name if method.return_type else "void"
    params = ", ".join(p.declaration() for p in method.parameters)
    return f"{return_type} {method.name}({params})"


# Define reusable arguments
SHADER_FILE_ARG = typer.Argument(..., help="Shader source file (.exisl or .hlsl)")
OUTPUT_FILE_ARG = typer.Argument(..., help="Output shader file path")


@typed_command(app.command("inspect"))
def inspect_shader(
    shader_file: Path = SHADER_FILE_ARG,
    style: str = typer.Option(
        "auto", "--style", "-s", help="Attribute syntax style (auto, c, cpp11)"
    ),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Also list lines without a recognised context"
    ),
) -> None:
    """Classify every line of a shader source.

    Example: exsl inspect shaders/lit.exisl
    """
    if not shader_file.exists():
        logger.error(f"File not found: {shader_file}")
        raise typer.Exit(1)

    reader = HLSLReader(shader_file.read_text(), syntax_style=_parse_style(style))
    logger.info(
        f"Inspecting {shader_file} "
        f"({'EXISL' if reader.is_il else 'HLSL'}, {reader.syntax_style.name})"
    )

    for line in reader.lines():
        context = reader.current_context
        if context == ContextType.NONE and not (show_all and line):
            continue
        detail = _describe_line(reader)
        text = f"{reader.line_number:4d}  {context.name:<22} {line}"
        if detail:
            text += f"  -> {detail}"
        typer.echo(text)

    for error in reader.errors:
        logger.warning(error.message)


@typed_command(app.command("new"))
def new_shader(
    output: Path = OUTPUT_FILE_ARG,
    plain: bool = typer.Option(
        False, "--plain", help="Write plain shader source instead of an EXISL document"
    ),
    name: str = typer.Option("main", "--name", "-n", help="Entry point name"),
    style: str = typer.Option(
        "cpp11", "--style", "-s", help="Attribute syntax style (c, cpp11)"
    ),
    shader_type: ShaderType = typer.Option(
        ShaderType.FRAGMENT, "--type", "-t", help="Shader type"
    ),
    stage: ShaderStage = typer.Option(ShaderStage.MAIN, "--stage", help="Shader stage"),
) -> None:
    """Write a new shader document with a single entry point.

    Example: exsl new shaders/unlit.exisl --name unlit
    """
    syntax_style = _parse_style(style)
    if syntax_style is None:
        raise typer.BadParameter("The syntax style of a new shader cannot be 'auto'")

    if not plain and not output.suffix:
        output = output.with_suffix(IL_FORMAT)

    writer = HLSLWriter(is_il=not plain, syntax_style=syntax_style)
    writer.exsl_type(shader_type)
    writer.exsl_stage(stage)
    writer.new_line()

    uv = create_parameter(HLSLFloat2, "uv")
    color = create_parameter(HLSLFloat4, "color")
    if plain:
        writer.start_method(name, [uv], HLSLFloat4)
    else:
        writer.il_start_node_method(name, [uv], HLSLFloat4, properties=Properties())
    writer.write(f"{color.declaration()} = float4(uv, 0, 1)")
    writer.end_line()
    writer.end_method(color)

    logger.info(f"Writing shader to {output}...")
    output.write_text(writer.get_written_data())
    logger.info(f"Shader written to {output}")


@typed_command(app.command("version"))
def show_version() -> None:
    """Print the package and EXISL versions."""
    from exsl import __version__

    typer.echo(f"exsl {__version__} (EXISL {CURRENT_IL_VERSION})")


if __name__ == "__main__":
    app()
