"""
Tests for the generate and config check use cases.
"""

import shutil
from pathlib import Path

import pytest

from templategen.core.use_cases.config_check import check_config
from templategen.core.use_cases.generate import run_generate
from tests.helpers import set_mtime, write_descriptor


def _output_dir(config_path: Path) -> Path:
    return config_path.parent / "build" / "generated-sources" / "templategen"


class TestRunGenerate:
    def test_generates_outputs(self, project: Path):
        result = run_generate(config_path=project)

        assert result.ok, result.error
        assert result.generated == 2
        out = _output_dir(project)
        assert (out / "mydir" / "success-test.txt").read_text(encoding="utf-8") == (
            "This is a test template. Test json data: 'test value'. "
            "Test build data: 'build value'.\n"
        )
        assert "'from yaml'" in (out / "other.txt").read_text(encoding="utf-8")

    def test_second_run_skips(self, project: Path):
        run_generate(config_path=project)
        result = run_generate(config_path=project)
        assert result.generated == 0
        assert result.skipped == 2

    def test_config_change_regenerates_everything(self, project: Path):
        run_generate(config_path=project)
        out = _output_dir(project)
        for path in out.rglob("*.txt"):
            set_mtime(path, project.stat().st_mtime - 100)

        result = run_generate(config_path=project)

        assert result.generated == 2

    def test_reference_file_change_regenerates(self, project: Path):
        project.write_text(
            "name: demo\nreference_files: [build.gradle]\nproperties:\n  buildVar: b\n"
        )
        gradle = project.parent / "build.gradle"
        gradle.write_text("")
        run_generate(config_path=project)
        out = _output_dir(project)
        newest = max(project.stat().st_mtime, gradle.stat().st_mtime)
        for path in out.rglob("*.txt"):
            set_mtime(path, newest + 10)
        set_mtime(gradle, newest + 100)

        result = run_generate(config_path=project)

        assert result.generated == 2

    def test_registers_source_root(self, project: Path):
        calls: list[tuple[Path, str]] = []
        result = run_generate(
            config_path=project, register_source_root=lambda p, s: calls.append((p, s))
        )
        assert calls == [(_output_dir(project).resolve(), "main")]
        assert result.source_root == _output_dir(project).resolve()
        assert result.scope == "main"

    def test_test_scope(self, project: Path):
        project.write_text("name: demo\nscope: test\nproperties:\n  buildVar: b\n")
        calls: list[tuple[Path, str]] = []
        run_generate(config_path=project, register_source_root=lambda p, s: calls.append((p, s)))
        assert calls[0][1] == "test"

    def test_no_registration_on_failure(self, project: Path):
        (project.parent / "codegen" / "generator" / "stray.xml").write_text("<x/>")
        calls: list = []

        result = run_generate(
            config_path=project, register_source_root=lambda p, s: calls.append(p)
        )

        assert not result.ok
        assert result.error.startswith("Unknown file extension: ")
        assert result.error.endswith("stray.xml")
        assert calls == []

    def test_dry_run(self, project: Path):
        calls: list = []
        result = run_generate(
            config_path=project, dry_run=True, register_source_root=lambda p, s: calls.append(p)
        )
        assert result.stale == 2
        assert not _output_dir(project).exists()
        assert calls == []

    def test_relative_config_path(self, project: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(project.parent)
        result = run_generate(config_path=Path("templategen.yml"))
        assert result.ok, result.error
        assert result.source_root == _output_dir(project).resolve()
        assert (_output_dir(project) / "other.txt").is_file()

    def test_missing_generator_dir(self, project: Path):
        shutil.rmtree(project.parent / "codegen" / "generator")
        result = run_generate(config_path=project)
        assert result.error == (
            "Required directory does not exist: "
            f"{(project.parent / 'codegen' / 'generator').resolve()}"
        )

    def test_missing_template_dir(self, project: Path):
        shutil.rmtree(project.parent / "codegen" / "template")
        result = run_generate(config_path=project)
        assert "Required directory does not exist" in result.error

    def test_render_error_surfaces_descriptor(self, project: Path):
        descriptor = write_descriptor(
            project.parent / "codegen" / "generator" / "zz-missing-var.txt.json",
            {"templateName": "test.j2"},
        )
        result = run_generate(config_path=project)
        assert result.error == (
            f"Could not process template associated with data file: {descriptor.resolve()}"
        )

    def test_non_string_data_model_key_is_reported(self, project: Path):
        (project.parent / "codegen" / "generator" / "zz-keys.txt.yml").write_text(
            "templateName: test.j2\ndataModel:\n  1: one\n", encoding="utf-8"
        )
        result = run_generate(config_path=project)
        assert not result.ok
        assert result.error.startswith("Property dataModel must have string keys")

    def test_invalid_engine_settings(self, project: Path):
        (project.parent / "codegen" / "engine.yml").write_text("not_a_setting: 1\n")
        result = run_generate(config_path=project)
        assert result.error.startswith("Invalid setting(s) in ")

    def test_missing_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        result = run_generate()
        assert result.error == "No templategen.yml found."
        assert result.to_dict() == {"ok": False, "error": "No templategen.yml found."}

    def test_to_dict(self, project: Path):
        data = run_generate(config_path=project).to_dict()
        assert data["ok"] is True
        assert data["project"] == "demo"
        assert data["counts"] == {"total": 2, "generated": 2, "skipped": 0, "stale": 0}
        assert {o["status"] for o in data["outcomes"]} == {"generated"}
        assert data["scope"] == "main"


class TestCheckConfig:
    def test_valid(self, project: Path):
        result = check_config(project)
        assert result.valid, result.errors
        assert result.descriptor_count == 2
        assert result.to_dict()["project_name"] == "demo"

    def test_missing_dirs(self, tmp_path: Path):
        path = tmp_path / "templategen.yml"
        path.write_text("name: empty\n")
        result = check_config(path)
        assert not result.valid
        assert len(result.errors) == 2
        assert all("Required directory does not exist" in e for e in result.errors)

    def test_unknown_extension_is_error(self, project: Path):
        (project.parent / "codegen" / "generator" / "notes.md").write_text("hi")
        result = check_config(project)
        assert not result.valid
        assert any(e.startswith("Unknown file extension") for e in result.errors)

    def test_bad_descriptor_is_error(self, project: Path):
        write_descriptor(project.parent / "codegen" / "generator" / "x.txt.json", {})
        result = check_config(project)
        assert "Required json data property not found: templateName" in result.errors

    def test_non_string_data_model_key_is_error(self, project: Path):
        (project.parent / "codegen" / "generator" / "keys.txt.yml").write_text(
            "templateName: test.j2\ndataModel:\n  yes: 1\n", encoding="utf-8"
        )
        result = check_config(project)
        assert not result.valid
        assert any("string keys" in e for e in result.errors)

    def test_context_key_collision_warns(self, project: Path):
        write_descriptor(
            project.parent / "codegen" / "generator" / "clash.txt.json",
            {"templateName": "test.j2", "dataModel": {"buildProperties": {}}},
        )
        result = check_config(project)
        assert result.valid
        assert any("buildProperties" in w for w in result.warnings)

    def test_empty_generator_dir_warns(self, project: Path):
        generator = project.parent / "codegen" / "generator"
        shutil.rmtree(generator)
        generator.mkdir()
        result = check_config(project)
        assert result.valid
        assert any("empty" in w for w in result.warnings)

    def test_missing_reference_file_warns(self, project: Path):
        project.write_text("name: demo\nreference_files: [pom.xml]\n")
        result = check_config(project)
        assert any("pom.xml" in w for w in result.warnings)

    def test_no_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        result = check_config()
        assert result.errors == ["No templategen.yml found."]
