"""
Tests for the compiler command line.
"""

import json

import pytest

from cmdtree.cli import main
from cmdtree.config import CompilerOptions


@pytest.fixture
def source_file(tmp_path, sample_source):
    path = tmp_path / "tool.cdl"
    path.write_text(sample_source, encoding="utf-8")
    return path


class TestSuccess:
    """Tests for a successful compilation."""

    def test_writes_both_artifacts(self, source_file, capsys):
        assert main([str(source_file), "tool_ns"]) == 0
        tree_path = source_file.with_name("tool.tree.json")
        bundle_path = source_file.with_name("tool.bundles.json")
        out = capsys.readouterr().out.splitlines()
        assert out == [str(tree_path.resolve()), str(bundle_path.resolve())]

    def test_tree_artifact(self, source_file):
        main([str(source_file), "tool_ns"])
        data = json.loads(source_file.with_name("tool.tree.json").read_text())
        assert data["namespace"] == "tool_ns"
        assert data["handler_names"] == [
            "add",
            "project_build",
            "project_init",
            "status",
            "help",
        ]
        assert [c["path"] for c in data["commands"]][:2] == ["project", "project/init"]

    def test_bundle_artifact(self, source_file):
        main([str(source_file), "tool_ns"])
        data = json.loads(source_file.with_name("tool.bundles.json").read_text())
        assert data["namespace"] == "tool_ns"
        assert data["bundles"]["add"]["title"] == "AddBundle"

    def test_custom_options(self, source_file):
        options = CompilerOptions.from_dict({"tree_suffix": ".contract.json", "indent": None})
        assert main([str(source_file), "ns"], options=options) == 0
        assert source_file.with_name("tool.contract.json").exists()


class TestFailures:
    """Tests for diagnostics and exit codes."""

    def test_wrong_argument_count(self, source_file):
        with pytest.raises(SystemExit) as exc_info:
            main([str(source_file)])
        assert exc_info.value.code == 2

    def test_wrong_extension(self, tmp_path, capsys):
        path = tmp_path / "tool.txt"
        path.write_text("cmd run\n")
        assert main([str(path), "ns"]) == 2
        assert ".cdl" in capsys.readouterr().err

    def test_invalid_namespace(self, source_file, capsys):
        assert main([str(source_file), "9-bad"]) == 1
        assert "invalid namespace" in capsys.readouterr().err
        assert not source_file.with_name("tool.tree.json").exists()

    def test_unreadable_source(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.cdl"), "ns"]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_compile_failure_writes_nothing(self, tmp_path, capsys):
        path = tmp_path / "bad.cdl"
        path.write_text('attr level = "x"\ncmd run\nattr level = 1\n')
        assert main([str(path), "ns"]) == 1
        assert f"{path}:3:" in capsys.readouterr().err
        assert not (tmp_path / "bad.tree.json").exists()
        assert not (tmp_path / "bad.bundles.json").exists()

    def test_syntax_error_is_line_numbered(self, tmp_path, capsys):
        path = tmp_path / "bad.cdl"
        path.write_text("cmd run\n\nfrob\n")
        assert main([str(path), "ns"]) == 1
        assert "bad.cdl:3: unknown keyword 'frob'" in capsys.readouterr().err


class TestBundleFieldNames:
    """Tests for declared names that clash with model attributes."""

    def test_model_attribute_flag_names_compile(self, tmp_path):
        path = tmp_path / "show.cdl"
        path.write_text('cmd show "Show"\nflag model-config bool "Config"\nflag json bool "JSON"\n')
        assert main([str(path), "ns"]) == 0
        data = (tmp_path / "show.bundles.json").read_text()
        assert "model-config" in data
