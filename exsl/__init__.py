from exsl.il import CommentNode, ILVersion, Node, Properties
from exsl.models import (
    Attribute,
    Field,
    MethodSignature,
    Parameter,
    create_field,
    create_parameter,
)
from exsl.reader import HLSLReader, classify_line, strip_comments
from exsl.registry import DEFAULT_REGISTRY, TypeRegistry, resolve_type, type_name
from exsl.syntax import ContextType, ShaderStage, ShaderType, SyntaxStyle
from exsl.types import (
    HLSLBool,
    HLSLDouble,
    HLSLFloat,
    HLSLFloat2,
    HLSLFloat3,
    HLSLFloat4,
    HLSLHalf,
    HLSLInt,
    HLSLType,
    HLSLUInt,
    HLSLUnregisteredType,
)
from exsl.writer import HLSLWriter

__version__ = "0.1.0"


__all__ = [
    "Attribute",
    "CommentNode",
    "ContextType",
    "DEFAULT_REGISTRY",
    "Field",
    "HLSLBool",
    "HLSLDouble",
    "HLSLFloat",
    "HLSLFloat2",
    "HLSLFloat3",
    "HLSLFloat4",
    "HLSLHalf",
    "HLSLInt",
    "HLSLReader",
    "HLSLType",
    "HLSLUInt",
    "HLSLUnregisteredType",
    "HLSLWriter",
    "ILVersion",
    "MethodSignature",
    "Node",
    "Parameter",
    "Properties",
    "ShaderStage",
    "ShaderType",
    "SyntaxStyle",
    "TypeRegistry",
    "classify_line",
    "create_field",
    "create_parameter",
    "resolve_type",
    "strip_comments",
    "type_name",
]
