"""
Tests for the compiler front end.
"""

import pytest

from cmdtree.compiler import compile_file, compile_source
from cmdtree.exceptions import DeclarationSyntaxError


class TestCompile:
    def test_compile_file(self, tmp_path, sample_source):
        path = tmp_path / "tool.cdl"
        path.write_text(sample_source, encoding="utf-8")
        tree = compile_file(path)
        assert tree == compile_source(sample_source)

    def test_error_names_the_file(self, tmp_path):
        path = tmp_path / "bad.cdl"
        path.write_text("frob\n", encoding="utf-8")
        with pytest.raises(DeclarationSyntaxError) as exc_info:
            compile_file(path)
        assert exc_info.value.context.source_name == "bad.cdl"
