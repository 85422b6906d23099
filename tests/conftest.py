"""
Shared test fixtures and utilities for the cmdtree test suite.
"""

import pytest

from cmdtree.compiler import compile_source
from cmdtree.execution.dispatch import Dispatcher

SAMPLE_SOURCE = '''
# Project management tool
name "tool" "Project management tool"
flag verbose bool "Verbose output" v
flag config string "Config file path" c
attr safe = true
attr retries = 3

cmd project "Project commands"
cmd project init "Initialize a project"
    arg name string "Project name"
    flag force bool "Overwrite existing files" f
    example "tool project init demo"
cmd project build "Build the project"
    flag target string "Build target" t
    attr safe = false
cmd add "Add an item"
    arg name string "Item name"
    flag tag string "Item tag" t
cmd status "Show status"

topic config "Configuration files"
text """
    Settings are read from tool.toml.
    Flags override file settings.
"""
'''


@pytest.fixture
def sample_source():
    """Declaration text exercising every statement kind.

    Tree shape:
        project
        ├── init   (arg name, flag --force/-f)
        └── build  (flag --target/-t, safe overridden to false)
        add        (arg name, flag --tag/-t)
        status
    """
    return SAMPLE_SOURCE


@pytest.fixture
def sample_tree(sample_source):
    """Resolved tree of the sample declaration."""
    return compile_source(sample_source, source_name="tool.cdl")


@pytest.fixture
def dispatcher(sample_tree):
    """Dispatcher over the sample tree."""
    return Dispatcher(sample_tree)
