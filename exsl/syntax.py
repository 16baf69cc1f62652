"""Syntax styles, line contexts and shader program enumerations."""

from enum import Enum, auto

from exsl.constants import (
    ATTRIBUTE_END_C,
    ATTRIBUTE_END_CPP11,
    ATTRIBUTE_START_C,
    ATTRIBUTE_START_CPP11,
)


class SyntaxStyle(Enum):
    """Attribute syntax of a document"""

    C = auto()  # [attribute]
    CPP11 = auto()  # [[attribute]]


class ContextType(Enum):
    """Syntactic context of a single source line."""

    NONE = auto()
    PRAGMA = auto()
    DEFINE_START = auto()
    DEFINE_END = auto()
    INCLUDE = auto()
    ATTRIBUTE = auto()
    METHOD_START = auto()
    METHOD_END = auto()

    IL = auto()
    IL_DEFINE = auto()

    IL_ATTRIBUTE = auto()
    IL_NODE_START = auto()
    IL_NODE_END = auto()
    IL_COMMENT_NODE_START = auto()
    IL_COMMENT_NODE_END = auto()

    @property
    def is_il(self) -> bool:
        return self.name.startswith("IL")


class ShaderType(Enum):
    """Programmable pipeline stage a shader is compiled for."""

    FRAGMENT = "fragment"
    VERTEX = "vertex"
    GEOMETRY = "geometry"
    TESSELLATION_CONTROL = "tessellationControl"
    TESSELLATION_EVALUATION = "tessellationEvaluation"
    COMPUTE = "compute"


class ShaderStage(Enum):
    """Engine rendering stage a shader runs in."""

    MAIN = "main"
    POST_PROCESSING = "postProcessing"


_FRAGMENT_INPUTS = {
    ShaderStage.MAIN: "EXSLFragVSInput",
    ShaderStage.POST_PROCESSING: "EXSLPostProcessingVSInput",
}


def attribute_start(style: SyntaxStyle) -> str:
    if style == SyntaxStyle.C:
        return ATTRIBUTE_START_C
    return ATTRIBUTE_START_CPP11


def attribute_end(style: SyntaxStyle) -> str:
    if style == SyntaxStyle.C:
        return ATTRIBUTE_END_C
    return ATTRIBUTE_END_CPP11


def shader_type_define(shader_type: ShaderType) -> str:
    """Get the ``#pragma EXSL_Type`` argument for a shader type."""
    return shader_type.value


def shader_stage_define(stage: ShaderStage) -> str:
    """Get the ``#pragma EXSL_Stage`` argument for a shader stage."""
    return stage.value


def fragment_input_name(stage: ShaderStage) -> str:
    """Get the name of the vertex-to-fragment input struct used by a stage."""
    return _FRAGMENT_INPUTS[stage]


__all__ = [
    "SyntaxStyle",
    "ContextType",
    "ShaderType",
    "ShaderStage",
    "attribute_start",
    "attribute_end",
    "shader_type_define",
    "shader_stage_define",
    "fragment_input_name",
]
