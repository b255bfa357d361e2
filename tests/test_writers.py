"""Tests for docweave.writers — registry lookup and the built-in writers."""

import xml.etree.ElementTree as ET
from unittest.mock import MagicMock, patch

import pytest

from docweave.behaviours import generate_paths
from docweave.errors import TransformationError, WriterNotFoundError
from docweave.templates import Transformation
from docweave.writers import Writer, WriterRegistry, artifact_path
from docweave.writers.file_io import FileIoWriter
from docweave.writers.jinja import JinjaWriter, expand_artifact
from docweave.writers.xml import XmlWriter


class _RecordingWriter:
    def __init__(self):
        self.calls = []

    def render(self, nodes, transformation, target):
        self.calls.append((nodes, transformation))
        return []


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestWriterRegistry:
    def test_builtins_resolve(self):
        registry = WriterRegistry()
        assert isinstance(registry.get("file_io"), FileIoWriter)
        assert isinstance(registry.get("jinja"), JinjaWriter)
        assert isinstance(registry.get("xml"), XmlWriter)

    def test_builtins_satisfy_protocol(self):
        registry = WriterRegistry()
        for name in WriterRegistry.BUILTINS:
            assert isinstance(registry.get(name), Writer)

    def test_instances_are_cached(self):
        registry = WriterRegistry()
        assert registry.get("xml") is registry.get("xml")

    def test_unknown_writer(self):
        with pytest.raises(WriterNotFoundError) as exc_info:
            WriterRegistry().get("pdf")
        assert exc_info.value.name == "pdf"
        assert isinstance(exc_info.value, TransformationError)

    def test_registered_writer_wins(self):
        custom = _RecordingWriter()
        registry = WriterRegistry({"xml": custom})
        assert registry.get("xml") is custom

    def test_register(self):
        registry = WriterRegistry()
        custom = _RecordingWriter()
        registry.register("custom", custom)
        assert registry.get("custom") is custom
        assert "custom" in registry.discover()

    @patch("docweave.writers.registry.importlib.metadata.entry_points")
    def test_entry_point_writer(self, mock_eps):
        ep = MagicMock()
        ep.name = "pdf"
        ep.load.return_value = _RecordingWriter
        mock_eps.return_value = [ep]

        registry = WriterRegistry()
        assert isinstance(registry.get("pdf"), _RecordingWriter)
        assert registry.discover() == ["pdf", "file_io", "jinja", "xml"]
        mock_eps.assert_called_with(group="docweave.writers")


class TestArtifactPath:
    def test_inside_target(self, target_dir):
        assert artifact_path(target_dir, "a/b.html") == target_dir / "a" / "b.html"

    def test_escape_rejected(self, target_dir):
        with pytest.raises(ValueError, match="escapes"):
            artifact_path(target_dir, "../outside.html")


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


@pytest.fixture
def jinja_dir(tmp_path):
    template_dir = tmp_path / "tpl"
    template_dir.mkdir()
    (template_dir / "index.html.j2").write_text(
        "<h1>{{ parameters.title }}</h1>"
        "{% for f in nodes %}<p>{{ f.get('path') }}</p>{% endfor %}"
    )
    (template_dir / "page.html.j2").write_text(
        "{{ node.get('path') }} -> {{ generate_filename(node.get('path')) }}"
    )
    (template_dir / "escape.html.j2").write_text("{{ parameters.title }}")
    return template_dir


class TestJinjaWriter:
    def test_single_artifact(self, document, jinja_dir, target_dir):
        t = Transformation(
            query="//file",
            writer="jinja",
            source="index.html.j2",
            artifact="index.html",
            parameters={"title": "API"},
            template_path=jinja_dir,
        )
        written = JinjaWriter().render(t.evaluate(document), t, target_dir)
        assert written == [target_dir / "index.html"]
        html = written[0].read_text()
        assert "<h1>API</h1>" in html
        assert "src/Shapes/Square.php" in html

    def test_default_artifact_from_source(self, document, jinja_dir, target_dir):
        t = Transformation(
            query=".", writer="jinja", source="index.html.j2",
            parameters={"title": "x"}, template_path=jinja_dir,
        )
        assert JinjaWriter().render(t.evaluate(document), t, target_dir) == [
            target_dir / "index.html"
        ]

    def test_one_artifact_per_node(self, document, jinja_dir, target_dir):
        generate_paths(document)
        t = Transformation(
            query="//file", writer="jinja", source="page.html.j2",
            artifact="{generated-path}", template_path=jinja_dir,
        )
        written = JinjaWriter().render(t.evaluate(document), t, target_dir)
        assert sorted(p.name for p in written) == [
            "_src_Shapes_Shape.html",
            "_src_Shapes_Square.html",
        ]
        assert (target_dir / "_src_Shapes_Shape.html").read_text() == (
            "src/Shapes/Shape.php -> _src_Shapes_Shape.html"
        )

    def test_nodes_without_placeholder_attribute_skipped(self, document, jinja_dir, target_dir):
        t = Transformation(
            query="//file", writer="jinja", source="page.html.j2",
            artifact="{generated-path}", template_path=jinja_dir,
        )
        assert JinjaWriter().render(t.evaluate(document), t, target_dir) == []

    def test_html_is_autoescaped(self, jinja_dir, target_dir):
        t = Transformation(
            writer="jinja", source="escape.html.j2", artifact="e.html",
            parameters={"title": "<b>"}, template_path=jinja_dir,
        )
        (written,) = JinjaWriter().render(None, t, target_dir)
        assert written.read_text() == "&lt;b&gt;"

    def test_missing_source(self, target_dir):
        with pytest.raises(ValueError, match="source"):
            JinjaWriter().render(None, Transformation(writer="jinja"), target_dir)

    def test_expand_artifact(self):
        node = ET.Element("file", {"generated-path": "a.html"})
        assert expand_artifact("docs/{generated-path}", node) == "docs/a.html"
        assert expand_artifact("{missing}", node) is None


class TestXmlWriter:
    def test_single_node_is_root(self, document, target_dir):
        t = Transformation(query=".", writer="xml")
        (written,) = XmlWriter().render(t.evaluate(document), t, target_dir)
        assert written == target_dir / "structure.xml"
        assert ET.parse(written).getroot().tag == "project"

    def test_many_nodes_wrapped(self, document, target_dir):
        t = Transformation(
            query="//class", writer="xml", artifact="classes.xml",
            parameters={"root": "classes", "indent": "false"},
        )
        (written,) = XmlWriter().render(t.evaluate(document), t, target_dir)
        root = ET.parse(written).getroot()
        assert root.tag == "classes"
        assert [c.findtext("name") for c in root] == ["Shape", "Square"]

    def test_document_not_modified(self, document, target_dir):
        t = Transformation(query=".", writer="xml")
        before = document.to_string()
        XmlWriter().render(t.evaluate(document), t, target_dir)
        assert document.to_string() == before

    def test_no_nodes(self, target_dir):
        with pytest.raises(ValueError):
            XmlWriter().render([], Transformation(writer="xml"), target_dir)


class TestFileIoWriter:
    def test_copies_directory(self, tmp_path, target_dir):
        assets = tmp_path / "tpl" / "css"
        assets.mkdir(parents=True)
        (assets / "style.css").write_text("body{}")
        t = Transformation(writer="file_io", source="css", template_path=tmp_path / "tpl")
        assert FileIoWriter().render(None, t, target_dir) == [target_dir / "css"]
        assert (target_dir / "css" / "style.css").read_text() == "body{}"

    def test_copies_file_to_artifact(self, tmp_path, target_dir):
        (tmp_path / "logo.png").write_bytes(b"png")
        t = Transformation(
            writer="file_io", source="logo.png", artifact="img/logo.png", template_path=tmp_path
        )
        FileIoWriter().render(None, t, target_dir)
        assert (target_dir / "img" / "logo.png").read_bytes() == b"png"

    def test_missing_source_file(self, tmp_path, target_dir):
        t = Transformation(writer="file_io", source="nope", template_path=tmp_path)
        with pytest.raises(FileNotFoundError):
            FileIoWriter().render(None, t, target_dir)

    def test_requires_source(self, target_dir):
        with pytest.raises(ValueError):
            FileIoWriter().render(None, Transformation(writer="file_io"), target_dir)


class TestTransformationExecute:
    def test_wraps_writer_failure(self, document, target_dir):
        t = Transformation(query=".", writer="file_io")
        with pytest.raises(TransformationError) as exc_info:
            t.execute(document, target_dir, WriterRegistry())
        assert exc_info.value.transformation is t
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_unknown_writer_bound_to_step(self, document, target_dir):
        t = Transformation(query=".", writer="pdf")
        with pytest.raises(TransformationError) as exc_info:
            t.execute(document, target_dir, WriterRegistry())
        assert exc_info.value.transformation is t
        assert isinstance(exc_info.value.__cause__, WriterNotFoundError)

    def test_passes_query_result_to_writer(self, document, target_dir):
        recorder = _RecordingWriter()
        t = Transformation(query="//class", writer="rec")
        t.execute(document, target_dir, WriterRegistry({"rec": recorder}))
        nodes, seen = recorder.calls[0]
        assert [n.findtext("name") for n in nodes] == ["Shape", "Square"]
        assert seen is t
