"""
Constants and predefined values for the EXSL shader tools.

This module holds the keyword vocabulary shared by the writer and the reader,
the EXISL (intermediate shader language) extension keywords and the process-wide
read-only configuration such as the EXISL version triple.
"""

# Version of the EXISL dialect written by this package
EXISL_VERSION_MAJOR = 1
EXISL_VERSION_MINOR = 0
EXISL_VERSION_PATCH = 0
EXISL_VERSION: tuple[int, int, int] = (
    EXISL_VERSION_MAJOR,
    EXISL_VERSION_MINOR,
    EXISL_VERSION_PATCH,
)

# Indentation width used when the writer is not configured otherwise
DEFAULT_SPACES_PER_STAGE = 4

# Base language keywords
DEFINE_KEYWORD = "#define"
PRAGMA_KEYWORD = "#pragma"
INCLUDE_KEYWORD = "#include"
CONST_KEYWORD = "const"
STATIC_KEYWORD = "static"
VOID_KEYWORD = "void"
RETURN_KEYWORD = "return"
NULL_KEYWORD = "null"

STATEMENT_TERMINATOR = ";"
BLOCK_START = "{"
BLOCK_END = "}"
LINE_COMMENT = "//"
BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"

# Attribute brackets for the two syntax styles
ATTRIBUTE_START_C = "["
ATTRIBUTE_END_C = "]"
ATTRIBUTE_START_CPP11 = "[["
ATTRIBUTE_END_CPP11 = "]]"

# EXSL pragma directives
EXSL_TYPE_PRAGMA = "EXSL_Type"
EXSL_STAGE_PRAGMA = "EXSL_Stage"
EXSL_SHADER_MODULE_PRAGMA = "EXSL_ShaderModule"

# EXISL vocabulary
IL_FORMAT = ".exisl"
IL_KEYWORD = "$IL"
IL_VERSION_KEYWORD = "ILVersion"
IL_DEFINE_KEYWORD = "Define"
IL_PROPERTY_START = "@IL."
IL_ATTRIBUTE_START = "@IL"
IL_NODE_KEY = "Node"
IL_COMMENT_NODE_KEY = "CommentNode"
IL_NODE_PROPERTIES_KEY = "NodeProperties"

IL_MARKER_COMMENT = (
    "Defines that the file is in the ExtremeEngine intermediate shader "
    "language (EXISL) format."
)
