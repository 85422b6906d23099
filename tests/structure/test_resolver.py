"""
Tests for semantic resolution of declarations.

Covers the attribute table, kind conflicts, flag validation, paths and
canonical names, leaf ordering and attribute inheritance.
"""

import pytest

from cmdtree.compiler import compile_source
from cmdtree.core.types import AttributeKind
from cmdtree.exceptions import (
    AttributeKindConflictError,
    DeclarationError,
    DuplicateFlagError,
    FlagKindError,
)
from cmdtree.parsing.parser import parse_declaration
from cmdtree.structure.resolver import (
    attribute_or_default,
    collect_attribute_kinds,
    resolve,
    resolve_attribute,
)


class TestAttributeTable:
    """Tests for the sorted attribute table and kind consistency."""

    def test_table_is_sorted_by_name(self, sample_tree):
        assert [(d.name, d.kind) for d in sample_tree.attribute_table] == [
            ("retries", AttributeKind.INT),
            ("safe", AttributeKind.BOOL),
        ]

    def test_local_only_attribute_is_collected(self):
        decl = parse_declaration('cmd run\nattr label = "x"')
        assert [d.name for d in collect_attribute_kinds(decl)] == ["label"]

    def test_conflicting_kinds_fail(self):
        source = 'attr level = "x"\ncmd run\nattr level = 1'
        with pytest.raises(AttributeKindConflictError) as exc_info:
            compile_source(source)
        error = exc_info.value
        assert error.line == 3
        assert error.existing_kind == "string"
        assert error.new_kind == "int"
        assert str(error) == "line 3: attribute 'level' has conflicting kinds: string vs int"

    def test_conflict_between_commands(self):
        source = "cmd a\nattr level = true\ncmd b\nattr level = 2"
        with pytest.raises(AttributeKindConflictError):
            compile_source(source)

    def test_consistent_kinds_compile(self):
        source = 'attr level = "x"\ncmd run\nattr level = "y"\ncmd walk\nattr level = "z"'
        tree = compile_source(source)
        assert [d.kind for d in tree.attribute_table] == [AttributeKind.STRING]

    def test_conflict_is_a_declaration_error(self):
        with pytest.raises(DeclarationError):
            compile_source("attr x = 1\nattr y = 2\ncmd a\nattr x = false")


class TestFlagValidation:
    """Tests for flag kinds and per-scope uniqueness."""

    def test_int_flag_is_rejected(self):
        with pytest.raises(FlagKindError) as exc_info:
            compile_source('cmd run\nflag count int "Count"')
        assert exc_info.value.line == 2
        assert exc_info.value.kind == "int"

    def test_duplicate_local_flag(self):
        with pytest.raises(DuplicateFlagError):
            compile_source('cmd run\nflag fast bool "Fast"\nflag fast string "Again"')

    def test_duplicate_short_alias(self):
        with pytest.raises(DuplicateFlagError):
            compile_source('cmd run\nflag fast bool "Fast" f\nflag force bool "Force" f')

    def test_help_flag_is_reserved_globally(self):
        with pytest.raises(DuplicateFlagError):
            compile_source('flag help bool "My help"')

    def test_help_alias_is_reserved_globally(self):
        with pytest.raises(DuplicateFlagError):
            compile_source('flag human bool "Human output" h')

    def test_same_name_in_different_scopes(self):
        tree = compile_source(
            'flag verbose bool "Global"\ncmd run\nflag verbose bool "Local"'
        )
        assert tree.find("run").flags[0].description == "Local"


class TestResolvedTree:
    """Tests for paths, canonical names and leaves."""

    def test_paths(self, sample_tree):
        assert [c.path for c in sample_tree.walk()] == [
            "project",
            "project/init",
            "project/build",
            "add",
            "status",
        ]

    def test_canonical_names(self, sample_tree):
        assert sample_tree.find("project/init").canonical_name == "ProjectInit"
        tree = compile_source("cmd db init-schema")
        assert tree.find("db/init-schema").canonical_name == "DbInitSchema"

    def test_leaves_sorted_by_path(self, sample_tree):
        assert [c.path for c in sample_tree.leaf_commands()] == [
            "add",
            "project/build",
            "project/init",
            "status",
        ]

    def test_ancestors(self, sample_tree):
        init = sample_tree.find("project/init")
        assert [c.path for c in sample_tree.ancestors(init)] == ["project", "project/init"]
        assert sample_tree.parent_of(init).path == "project"

    def test_resolve_does_not_modify_declaration(self, sample_source):
        decl = parse_declaration(sample_source)
        before = parse_declaration(sample_source)
        resolve(decl)
        assert decl == before

    def test_app_name(self, sample_tree):
        assert sample_tree.app_name == "tool"
        assert sample_tree.tagline == "Project management tool"


class TestAttributeInheritance:
    """Tests for local override, global default and zero values."""

    def test_global_default_without_override(self, sample_tree):
        init = sample_tree.find("project/init")
        assert attribute_or_default(sample_tree, init, "safe") is True

    def test_local_override_wins(self, sample_tree):
        build = sample_tree.find("project/build")
        assert attribute_or_default(sample_tree, build, "safe") is False

    def test_override_wins_regardless_of_global_value(self):
        tree = compile_source("attr safe = false\ncmd run\nattr safe = true")
        assert attribute_or_default(tree, tree.find("run"), "safe") is True

    def test_missing_everywhere_gives_zero_value(self):
        tree = compile_source('cmd a\nattr label = "x"\nattr retries = 2\nattr on = true\ncmd b')
        b = tree.find("b")
        assert attribute_or_default(tree, b, "label") == ""
        assert attribute_or_default(tree, b, "retries") == 0
        assert attribute_or_default(tree, b, "on") is False

    def test_resolve_attribute_reports_absence(self):
        tree = compile_source('cmd a\nattr label = "x"\ncmd b')
        assert resolve_attribute(tree, tree.find("b"), "label") is None
        assert resolve_attribute(tree, tree.find("a"), "label").value == "x"

    def test_root_scope_uses_global(self, sample_tree):
        assert attribute_or_default(sample_tree, None, "retries") == 3

    def test_undeclared_attribute(self, sample_tree):
        with pytest.raises(KeyError):
            attribute_or_default(sample_tree, None, "nope")
