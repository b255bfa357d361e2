"""Tests for docweave.document — parsing, queries and filename derivation."""

import pytest

from docweave.document import Document, generate_filename, is_inline, parse
from docweave.errors import ConfigurationError, MalformedSourceError

LATIN1_STRUCTURE = (
    '<?xml version="1.0" encoding="ISO-8859-1"?>'
    '<project><file path="café.php"/></project>'
)


# ---------------------------------------------------------------------------
# generate_filename
# ---------------------------------------------------------------------------


class TestGenerateFilename:
    def test_markdown_path(self):
        assert generate_filename("docs/guide/intro.md") == "_docs_guide_intro.html"

    def test_nested_source_path(self):
        assert generate_filename("src/Foo/Bar.php") == "_src_Foo_Bar.html"

    def test_strips_leading_dot_slash(self):
        assert generate_filename("./src/main.py") == "_src_main.html"

    def test_strips_leading_separator(self):
        assert generate_filename("/abs/path/file.ext") == "_abs_path_file.html"

    def test_backslash_separators(self):
        assert generate_filename("src\\Foo\\Bar.php") == "_src_Foo_Bar.html"

    def test_only_last_extension_removed(self):
        assert generate_filename("lib/a.b/c.tar.gz") == "_lib_a.b_c.tar.html"

    def test_no_extension(self):
        assert generate_filename("Makefile") == "_Makefile.html"

    def test_dotted_directory_keeps_its_name(self):
        assert generate_filename("lib.d/Makefile") == "_lib.d_Makefile.html"
        assert generate_filename("lib.d/README") == "_lib.d_README.html"

    def test_dotted_directory_files_stay_distinct(self):
        assert generate_filename("lib.d/Makefile") != generate_filename("lib.d/README")

    def test_custom_extension(self):
        assert generate_filename("src/x.py", extension=".xml") == "_src_x.xml"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsing:
    def test_is_inline(self, structure_xml):
        assert is_inline(structure_xml)
        assert is_inline("   " + structure_xml)
        assert not is_inline("structure.xml")

    def test_from_string(self, structure_xml):
        doc = Document.from_string(structure_xml)
        assert doc.root.tag == "project"

    def test_from_path(self, structure_file):
        doc = Document.from_path(structure_file)
        assert len(doc.query("//file")) == 2

    def test_parse_dispatches_inline_and_path(self, structure_xml, structure_file):
        assert parse(structure_xml).root.tag == "project"
        assert parse(structure_file).root.tag == "project"

    def test_malformed_raises(self):
        with pytest.raises(MalformedSourceError):
            Document.from_string("<?xml version='1.0'?><project><file></project>")

    def test_malformed_is_configuration_error(self, tmp_path):
        bad = tmp_path / "bad.xml"
        bad.write_text("<project>")
        with pytest.raises(ConfigurationError):
            Document.from_path(bad)

    def test_from_string_honours_declared_encoding(self):
        doc = Document.from_string(LATIN1_STRUCTURE)
        assert doc.query("//file")[0].get("path") == "café.php"

    def test_from_path_honours_declared_encoding(self, tmp_path):
        latin = tmp_path / "latin.xml"
        latin.write_bytes(LATIN1_STRUCTURE.encode("latin-1"))
        assert Document.from_path(latin).query("//file")[0].get("path") == "café.php"


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


class TestQuery:
    def test_root_selectors(self, document):
        for expr in (".", "/", ""):
            assert document.query(expr) == [document.root]

    def test_descendant_search(self, document):
        names = [c.findtext("name") for c in document.query("//class")]
        assert names == ["Shape", "Square"]

    def test_absolute_path_anchored_at_root(self, document):
        assert len(document.query("/project/file")) == 2
        assert document.query("/project") == [document.root]

    def test_absolute_path_with_wrong_root_is_empty(self, document):
        assert document.query("/other/file") == []

    def test_relative_with_predicate(self, document):
        files = document.query("./file[@path='src/Shapes/Square.php']")
        assert len(files) == 1

    def test_invalid_expression_raises(self, document):
        with pytest.raises(SyntaxError):
            document.query("./file[@path=")


class TestCopy:
    def test_copy_is_independent(self, document):
        clone = document.copy()
        clone.root.remove(clone.root[0])
        assert len(document.query("//file")) == 2
        assert len(clone.query("//file")) == 1

    def test_to_string_round_trips(self, document):
        again = Document.from_string(document.to_string())
        assert len(again.query("//method")) == len(document.query("//method"))
