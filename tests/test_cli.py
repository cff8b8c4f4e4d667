"""Tests for the schema-templates command line."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from schema_templates.cli import TemplatesCLI, main
from schema_templates.config import clear_settings_cache
from schema_templates.core.errors import ErrorCode, SpecLoadError, UsageError

FIXTURES = Path(__file__).parent / "fixtures"
STORAGE_SCHEMA = FIXTURES / "storage_schema.json"


def _tree(root: Path):
    return {
        p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()
    }


class TestTemplatesCLI:
    """Test cases for TemplatesCLI."""

    def setup_method(self):
        self.cli = TemplatesCLI("schema-templates")

    def test_usage_message(self):
        assert self.cli.usage() == (
            "error: usage: schema-templates <out-dir> <provider-schema-file>"
        )

    def test_parse_paths(self):
        assert self.cli.parse_paths(["out", "schema.json", "extra"]) == ("out", "schema.json")

    @pytest.mark.parametrize("paths", [[], ["out"]])
    def test_parse_paths_too_few(self, paths):
        with pytest.raises(UsageError) as exc:
            self.cli.parse_paths(paths)
        assert exc.value.error_code == ErrorCode.USAGE_ERROR
        assert exc.value.message == self.cli.usage()

    def test_load_spec_valid_file(self):
        spec = self.cli.load_spec(str(STORAGE_SCHEMA))
        assert spec["name"] == "storage"
        assert "storage:blob/bucket:Bucket" in spec["resources"]

    def test_load_spec_nonexistent_file(self):
        with pytest.raises(SpecLoadError, match="error reading schema file") as exc:
            self.cli.load_spec("/path/that/does/not/exist.json")
        assert exc.value.error_code == ErrorCode.IO_ERROR
        assert exc.value.context["path"] == "/path/that/does/not/exist.json"

    def test_load_spec_invalid_json(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            f.write("{not json")
            temp_path = f.name

        try:
            with pytest.raises(SpecLoadError, match="unmarshalling") as exc:
                self.cli.load_spec(temp_path)
            assert exc.value.error_code == ErrorCode.FORMAT_ERROR
        finally:
            Path(temp_path).unlink()

    def test_load_spec_rejects_non_object(self, tmp_path):
        schema = tmp_path / "schema.json"
        schema.write_text("[1, 2, 3]")

        with pytest.raises(SpecLoadError, match="expected an object"):
            self.cli.load_spec(str(schema))

    def test_run_generate_success(self, tmp_path):
        out_dir = tmp_path / "out"
        assert self.cli.run_generate(str(out_dir), str(STORAGE_SCHEMA)) == 0
        assert (out_dir / "README.md").is_file()
        assert (out_dir / "blob" / "bucket" / "Pulumi.yaml").is_file()

    def test_run_generate_import_failure(self, tmp_path):
        out_dir = tmp_path / "out"
        schema = FIXTURES / "invalid" / "unknown_type_ref.json"

        assert self.cli.run_generate(str(out_dir), str(schema)) == 1
        assert not out_dir.exists()


class TestMain:
    """Test cases for the main entry point."""

    @pytest.mark.parametrize("argv", [[], ["only-out-dir"]])
    def test_too_few_arguments(self, argv, tmp_path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert main(argv) == 1

        err = capsys.readouterr().err
        assert "usage:" in err
        assert "<out-dir> <provider-schema-file>" in err
        assert list(tmp_path.iterdir()) == []

    def test_missing_schema_file(self, tmp_path):
        out_dir = tmp_path / "out"
        assert main([str(out_dir), str(tmp_path / "missing.json")]) == 1
        assert not out_dir.exists()

    def test_invalid_json(self, tmp_path):
        schema = tmp_path / "schema.json"
        schema.write_text('{"name": "broken",')
        out_dir = tmp_path / "out"

        assert main([str(out_dir), str(schema)]) == 1
        assert not out_dir.exists()

    def test_generates_files(self, tmp_path):
        out_dir = tmp_path / "out"

        assert main([str(out_dir), str(STORAGE_SCHEMA)]) == 0

        files = _tree(out_dir)
        assert set(files) == {
            "README.md",
            "blob/bucket/Pulumi.yaml",
            "blob/bucket/README.md",
            "blob/bucket-object/Pulumi.yaml",
            "blob/bucket-object/README.md",
            "index/volume/Pulumi.yaml",
            "index/volume/README.md",
        }

    def test_output_matches_generator(self, tmp_path):
        """Every generated file is written byte for byte."""
        from schema_templates.config import get_settings
        from schema_templates.schema import import_spec
        from schema_templates.templates import generate_package

        spec = json.loads(STORAGE_SCHEMA.read_text())
        expected = generate_package(get_settings().generator_name, import_spec(spec))

        out_dir = tmp_path / "out"
        assert main([str(out_dir), str(STORAGE_SCHEMA)]) == 0
        assert _tree(out_dir) == expected

    def test_rerun_overwrites(self, tmp_path):
        out_dir = tmp_path / "out"
        assert main([str(out_dir), str(STORAGE_SCHEMA)]) == 0
        first = _tree(out_dir)

        # Stale content must be truncated, not appended to
        (out_dir / "blob" / "bucket" / "README.md").write_text("stale" * 1000)

        assert main([str(out_dir), str(STORAGE_SCHEMA)]) == 0
        assert _tree(out_dir) == first

    def test_deep_output_directory(self, tmp_path):
        out_dir = tmp_path / "a" / "b" / "c" / "d"
        assert main([str(out_dir), str(STORAGE_SCHEMA)]) == 0
        assert (out_dir / "blob" / "bucket-object" / "Pulumi.yaml").is_file()

    def test_extra_arguments_ignored(self, tmp_path):
        out_dir = tmp_path / "out"
        assert main([str(out_dir), str(STORAGE_SCHEMA), "extra"]) == 0
        assert (out_dir / "README.md").is_file()

    @patch("schema_templates.cli.TemplatesCLI.run_generate")
    def test_verbose_flag(self, mock_run):
        mock_run.return_value = 0

        assert main(["-v", "out", "schema.json"]) == 0
        mock_run.assert_called_once_with("out", "schema.json")

    @patch("schema_templates.cli.generate_docs_from_schema")
    def test_generation_failure_exit_code(self, mock_generate, tmp_path):
        from schema_templates.core.errors import GenerationError

        mock_generate.side_effect = GenerationError("generating package: boom")

        assert main([str(tmp_path / "out"), str(STORAGE_SCHEMA)]) == 1

    def test_usage_names_invoked_program(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.argv", ["/usr/local/bin/pulumi-templates"])

        assert main([]) == 1
        assert "usage: pulumi-templates <out-dir> <provider-schema-file>" in capsys.readouterr().err

    def test_lowercase_log_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SCHEMA_TEMPLATES_LOG_LEVEL", "debug")
        clear_settings_cache()
        try:
            assert main([str(tmp_path / "out"), str(STORAGE_SCHEMA)]) == 0
        finally:
            clear_settings_cache()

    @patch("schema_templates.cli.logger")
    def test_invalid_settings(self, mock_logger, tmp_path, monkeypatch):
        monkeypatch.setenv("SCHEMA_TEMPLATES_LOG_LEVEL", "LOUD")
        clear_settings_cache()
        try:
            assert main([str(tmp_path / "out"), str(STORAGE_SCHEMA)]) == 1
        finally:
            clear_settings_cache()

        message = str(mock_logger.error.call_args[0][1])
        assert "[USAGE_ERROR] invalid settings" in message
        assert not (tmp_path / "out").exists()
