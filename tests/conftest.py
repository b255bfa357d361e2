"""Shared test fixtures for docweave."""

from pathlib import Path

import pytest
import yaml

from docweave.config.models import DocweaveConfig
from docweave.document import Document

STRUCTURE_XML = r"""<?xml version="1.0" encoding="utf-8"?>
<project version="1.0">
  <file path="src/Shapes/Shape.php">
    <class namespace="Shapes" abstract="true">
      <name>Shape</name>
      <full_name>\Shapes\Shape</full_name>
      <docblock><description>Base shape.</description></docblock>
      <method visibility="public">
        <name>area</name>
        <docblock><description>Surface area.</description></docblock>
      </method>
      <method visibility="public">
        <name>debugDump</name>
        <docblock>
          <description>Dumps state.</description>
          <tag name="internal" description="only for tests"/>
        </docblock>
      </method>
      <property visibility="private"><name>$cache</name></property>
      <constant><name>SIDES</name></constant>
    </class>
  </file>
  <file path="src/Shapes/Square.php">
    <class namespace="Shapes">
      <name>Square</name>
      <full_name>\Shapes\Square</full_name>
      <extends>\Shapes\Shape</extends>
      <docblock>
        <description>A square. {@internal uses the fast path}}</description>
        <tag name="see" refers="\Shapes\Shape"/>
      </docblock>
      <method visibility="public"><name>area</name></method>
      <method visibility="protected">
        <name>legacy</name>
        <docblock><tag name="ignore"/></docblock>
      </method>
    </class>
    <function>
      <name>square</name>
      <docblock><tag name="return" type="\Shapes\Square|null"/></docblock>
    </function>
  </file>
</project>
"""


def write_template(
    root: Path,
    name: str,
    transformations: list[dict] | None = None,
    extends: list[str] | None = None,
    files: dict[str, str] | None = None,
    **meta,
) -> Path:
    """Write a template directory with a template.yaml and optional extra files."""
    template_dir = root / name
    template_dir.mkdir(parents=True, exist_ok=True)
    definition = dict(meta)
    if extends:
        definition["extends"] = extends
    definition["transformations"] = transformations or []
    (template_dir / "template.yaml").write_text(yaml.safe_dump(definition, sort_keys=False))
    for rel, content in (files or {}).items():
        path = template_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return template_dir


@pytest.fixture
def structure_xml():
    return STRUCTURE_XML


@pytest.fixture
def structure_file(tmp_path):
    path = tmp_path / "structure.xml"
    path.write_text(STRUCTURE_XML, encoding="utf-8")
    return path


@pytest.fixture
def document():
    return Document.from_string(STRUCTURE_XML)


@pytest.fixture
def themes_dir(tmp_path):
    themes = tmp_path / "themes"
    themes.mkdir()
    return themes


@pytest.fixture
def target_dir(tmp_path):
    target = tmp_path / "output"
    target.mkdir()
    return target


@pytest.fixture
def sample_config():
    return DocweaveConfig()


@pytest.fixture
def make_template():
    return write_template
