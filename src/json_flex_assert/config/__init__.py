"""Config subpackage: path parsing, the configuration tree and option resolution.

Re-exports the public API for the config module:
- PathComponent / parse_path: turn an option path string into steps
- ConfigNode / ConfigTree: the arena-backed per-call policy tree
- ConfigTreeBuilder / build_config_tree: fold PathOptions onto a tree
- resolve_option: effective policy for one value position
"""

from json_flex_assert.config.builder import ConfigTreeBuilder, build_config_tree
from json_flex_assert.config.nodes import ConfigNode, ConfigTree
from json_flex_assert.config.parser import (
    PathComponent,
    format_path,
    parse_path,
    parse_path_strict,
)
from json_flex_assert.config.resolver import own_option, resolve_option

__all__ = [
    "ConfigNode",
    "ConfigTree",
    "ConfigTreeBuilder",
    "PathComponent",
    "build_config_tree",
    "format_path",
    "own_option",
    "parse_path",
    "parse_path_strict",
    "resolve_option",
]
