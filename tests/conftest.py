"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from tests.helpers import TEST_TEMPLATE, write_descriptor


@pytest.fixture
def layout(tmp_path: Path) -> dict[str, Path]:
    """Generator, template and output directories with two test templates."""
    dirs = {
        "generator": tmp_path / "generator",
        "template": tmp_path / "template",
        "output": tmp_path / "output",
    }
    dirs["generator"].mkdir()
    dirs["template"].mkdir()
    (dirs["template"] / "test.j2").write_text(TEST_TEMPLATE, encoding="utf-8")
    (dirs["template"] / "test-build-only.j2").write_text(
        "Build data: '{{ buildProperties.buildVar }}'.\n", encoding="utf-8"
    )
    return dirs


@pytest.fixture
def data_model() -> dict:
    """Data model matching TEST_TEMPLATE."""
    return {"testVar": "test value", "buildProperties": {"buildVar": "build value"}}


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A complete project: templategen.yml, a template and two descriptors."""
    (tmp_path / "templategen.yml").write_text(
        "name: demo\n"
        "properties:\n"
        "  buildVar: build value\n",
        encoding="utf-8",
    )
    template_dir = tmp_path / "codegen" / "template"
    template_dir.mkdir(parents=True)
    (template_dir / "test.j2").write_text(TEST_TEMPLATE, encoding="utf-8")

    generator_dir = tmp_path / "codegen" / "generator"
    write_descriptor(
        generator_dir / "mydir" / "success-test.txt.json",
        {"templateName": "test.j2", "dataModel": {"testVar": "test value"}},
    )
    (generator_dir / "other.txt.yml").write_text(
        "templateName: test.j2\ndataModel:\n  testVar: from yaml\n", encoding="utf-8"
    )
    return tmp_path / "templategen.yml"
