"""Tests for the EXISL extension of the writer and the reader."""

import pytest

from exsl import HLSLReader, HLSLWriter
from exsl.errors import ILOperationError
from exsl.il import CURRENT_IL_VERSION, CommentNode, ILVersion, Node, Properties
from exsl.models import MethodSignature
from exsl.syntax import ContextType, SyntaxStyle
from exsl.types import HLSLFloat2, HLSLFloat4

MARKER_COMMENT = (
    "// Defines that the file is in the ExtremeEngine intermediate shader "
    "language (EXISL) format.\n"
)
PROLOGUE = "$IL;\n" + MARKER_COMMENT + '@IL.ILVersion("1.0.0");\n'


def _body(writer: HLSLWriter) -> str:
    """Get what was written after the IL prologue."""
    data = writer.data
    assert data.startswith(PROLOGUE)
    return data[len(PROLOGUE) :]


class TestILWriterPrologue:
    """Test the prologue of IL-flavored writers."""

    def test_prologue(self, il_writer):
        assert il_writer.is_il
        assert il_writer.data == PROLOGUE
        assert CURRENT_IL_VERSION == ILVersion(1, 0, 0)

    def test_custom_version(self):
        writer = HLSLWriter(is_il=True, version=(2, 3, 4))
        assert writer.data.endswith('@IL.ILVersion("2.3.4");\n')
        assert str(writer.version) == "2.3.4"

    def test_plain_writer_has_no_prologue(self, writer):
        assert not writer.is_il
        assert writer.data == ""


class TestILWriterOperations:
    """Test IL-only emission."""

    def test_node_without_properties(self, il_writer):
        il_writer.il_start_node_method()
        il_writer.il_end_node_method()
        assert _body(il_writer) == "@IL.Node void main()\n{\n}\n"

    def test_node_with_properties(self, il_writer, uv, color):
        properties = Properties(HLSLFloat2(10.5, -3), HLSLFloat2(2, 2))
        il_writer.il_start_node_method("main", [uv], HLSLFloat4, properties=properties)
        il_writer.write("float4 color = float4(uv, 0, 1)")
        il_writer.end_line()
        il_writer.il_end_node_method(color)
        assert _body(il_writer) == (
            "@IL[[NodeProperties(float2(10.5, -3), float2(2, 2))]]\n"
            "@IL.Node float4 main(float2 uv)\n"
            "{\n"
            "    float4 color = float4(uv, 0, 1);\n"
            "    return color;\n"
            "}\n"
        )

    def test_default_properties(self, il_writer):
        il_writer.il_node_properties_attribute(Properties())
        assert _body(il_writer) == "@IL[[NodeProperties(float2(0, 0), float2(1, 1))]]\n"

    def test_c_style_properties(self):
        writer = HLSLWriter(is_il=True, syntax_style=SyntaxStyle.C)
        writer.il_node_properties_attribute(Properties())
        assert _body(writer) == "@IL[NodeProperties(float2(0, 0), float2(1, 1))]\n"

    def test_static_node(self, il_writer, uv):
        il_writer.il_start_node_method("blend", [uv], HLSLFloat4, static=True)
        assert _body(il_writer) == "static @IL.Node float4 blend(float2 uv)\n{\n    "

    def test_node_context_manager(self, il_writer):
        with il_writer.il_node("noop"):
            il_writer.write_return()
        assert _body(il_writer) == "@IL.Node void noop()\n{\n    return;\n}\n"

    def test_write_node(self, il_writer, uv):
        node = Node(MethodSignature("tint", HLSLFloat4(), (uv,)))
        il_writer.il_write_node(node)
        assert _body(il_writer) == (
            "@IL[[NodeProperties(float2(0, 0), float2(1, 1))]]\n"
            "@IL.Node float4 tint(float2 uv)\n"
            "{\n    "
        )

    def test_comment_node(self, il_writer):
        il_writer.il_define_comment_node("Lighting", "Computes the diffuse term")
        il_writer.il_define_comment_node(None, "No header")
        assert _body(il_writer) == (
            '@IL.CommentNode("Lighting", "Computes the diffuse term");\n'
            '@IL.CommentNode("", "No header");\n'
        )

    def test_comment_node_with_properties(self, il_writer):
        properties = Properties(HLSLFloat2(-200, 0))
        il_writer.il_define_comment_node("Note", "text", properties)
        assert _body(il_writer) == (
            "@IL[[NodeProperties(float2(-200, 0), float2(1, 1))]]\n"
            '@IL.CommentNode("Note", "text");\n'
        )

    def test_define_and_write(self, il_writer):
        il_writer.il_define("Output color")
        il_writer.end_line()
        il_writer.il_write("Custom")
        assert _body(il_writer) == "@IL.Define Output color;\n@IL.Custom"


class TestILGate:
    """Test that IL operations are refused on plain documents."""

    @pytest.mark.parametrize(
        "operation",
        [
            lambda w: w.il_define_exisl_shader(),
            lambda w: w.il_define_version(),
            lambda w: w.il_write("Node "),
            lambda w: w.il_define("Foo"),
            lambda w: w.il_node_properties_attribute(Properties()),
            lambda w: w.il_start_node_method(properties=Properties()),
            lambda w: w.il_end_node_method(),
            lambda w: w.il_define_comment_node("h", "c"),
            lambda w: w.il_write_node(Node(MethodSignature())),
        ],
    )
    def test_writer_operation_is_refused(self, writer, operation):
        writer.pragma_directive("EXSL_Type fragment")
        before = writer.data

        error = operation(writer)

        assert isinstance(error, ILOperationError)
        assert writer.data == before
        assert writer.errors == [error]
        assert "non-IL" in str(error)

    def test_writer_stays_usable(self, writer):
        writer.il_define_version()
        writer.include("common.hlsl")
        assert writer.data == '#include "common.hlsl"\n'

    def test_node_context_manager_on_plain_writer(self, writer):
        with writer.il_node():
            pass
        assert writer.data == ""
        assert len(writer.errors) == 1

    @pytest.mark.parametrize(
        "operation",
        [
            lambda r: r.get_il_version(),
            lambda r: r.get_il_node(),
            lambda r: r.get_il_node_properties(),
            lambda r: r.get_il_comment_node(),
        ],
    )
    def test_reader_operation_is_refused(self, operation):
        reader = HLSLReader("@IL.Node void main()\n", is_il=False)
        reader.read()
        assert operation(reader) is None
        assert len(reader.errors) == 1
        assert isinstance(reader.errors[0], ILOperationError)


class TestILReader:
    """Test IL-only extraction."""

    def test_detects_il_documents(self, il_writer):
        assert HLSLReader(il_writer.data).is_il
        assert HLSLReader("\n// header\n$IL\n").is_il
        assert not HLSLReader("#pragma EXSL_Type fragment\n$IL;\n").is_il
        assert not HLSLReader("").is_il

    def test_marker_and_version(self, il_writer):
        reader = HLSLReader(il_writer.data)
        reader.read()
        assert reader.current_context == ContextType.IL
        assert reader.get_is_il()
        reader.read()
        assert reader.current_line == ""
        assert not reader.get_is_il()
        reader.read()
        assert reader.current_context == ContextType.IL_DEFINE
        assert reader.get_il_version() == ILVersion(1, 0, 0)

    def test_node(self):
        reader = HLSLReader("@IL.Node void main()\n", is_il=True)
        reader.read()
        assert reader.current_context == ContextType.IL_NODE_START
        node = reader.get_il_node()
        assert node == Node(MethodSignature("main", None, ()))
        assert node.method.return_type is None
        assert node.method.parameters == ()
        assert node.properties == Properties()

    def test_static_node(self, uv):
        reader = HLSLReader("static @IL.Node float4 blend(float2 uv)", is_il=True)
        reader.read()
        assert reader.current_context == ContextType.IL_NODE_START
        node = reader.get_il_node()
        assert node.method.static
        assert node.method.return_type == HLSLFloat4()
        assert node.method.parameters == (uv,)

    def test_node_misses_on_plain_method(self):
        reader = HLSLReader("float4 main(float2 uv)", is_il=True)
        reader.read()
        assert reader.get_il_node() is None
        assert not reader.errors

    def test_node_properties(self):
        reader = HLSLReader(
            "@IL[[NodeProperties(float2(10.5, -3), float2(2, 2))]]", is_il=True
        )
        reader.read()
        assert reader.current_context == ContextType.IL_ATTRIBUTE
        assert reader.get_il_node_properties() == Properties(
            HLSLFloat2(10.5, -3), HLSLFloat2(2, 2)
        )

    def test_comment_node(self):
        reader = HLSLReader(
            '@IL.CommentNode("Lighting", "see // and /* */ here");', is_il=True
        )
        reader.read()
        assert reader.current_context == ContextType.IL_COMMENT_NODE_START
        assert reader.get_il_comment_node() == CommentNode(
            "Lighting", "see // and /* */ here"
        )

    def test_extraction_misses(self):
        reader = HLSLReader("#pragma EXSL_Type fragment", is_il=True)
        reader.read()
        assert reader.get_il_version() is None
        assert reader.get_il_node() is None
        assert reader.get_il_node_properties() is None
        assert reader.get_il_comment_node() is None
        assert not reader.errors


class TestILWriteRead:
    """Test that IL data written by the writer is read back unchanged."""

    @staticmethod
    def _read_back(writer: HLSLWriter, context: ContextType) -> HLSLReader:
        reader = HLSLReader(writer.data)
        for _ in reader.lines():
            if reader.current_context == context:
                return reader
        raise AssertionError(f"No {context.name} line in {writer.data!r}")

    @pytest.mark.parametrize(
        "position, scale",
        [
            ((1234.5678, 250000.5), (1, 1)),
            ((-0.1, 0.3), (0.333333, 1e-7)),
            ((16777216, -2.5e-3), (3.4e38, 0.5)),
        ],
    )
    def test_node_properties(self, il_writer, position, scale):
        properties = Properties(HLSLFloat2(position), HLSLFloat2(scale))
        il_writer.il_node_properties_attribute(properties)

        reader = self._read_back(il_writer, ContextType.IL_ATTRIBUTE)
        read = reader.get_il_node_properties()
        assert read == properties
        assert read.position.same_value(properties.position)
        assert read.scale.same_value(properties.scale)

    def test_properties_compare_by_value(self):
        assert Properties(HLSLFloat2(1, 2)) == Properties(HLSLFloat2(1, 2))
        assert Properties(HLSLFloat2(1, 2)) != Properties(HLSLFloat2(2, 1))
        assert Properties() != Properties(scale=HLSLFloat2(2, 2))

    @pytest.mark.parametrize(
        "header, comment",
        [
            ('Say "hi"', "plain"),
            ("Path", "C:\\shaders\\lit.exisl"),
            ("Mixed", 'a \\" b // c'),
            ("", ""),
        ],
    )
    def test_comment_node_with_quotes(self, il_writer, header, comment):
        il_writer.il_define_comment_node(header, comment)

        reader = self._read_back(il_writer, ContextType.IL_COMMENT_NODE_START)
        assert reader.get_il_comment_node() == CommentNode(header, comment)

    def test_quotes_are_escaped(self, il_writer):
        il_writer.il_define_comment_node('Say "hi"', "back\\slash")
        assert _body(il_writer) == '@IL.CommentNode("Say \\"hi\\"", "back\\\\slash");\n'
