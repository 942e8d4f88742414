"""ConfigTreeBuilder: folds an ordered list of PathOptions onto a ConfigTree.

Each option is expanded into one application per path.  An application walks
a *frontier* of nodes from the root, one parsed PathComponent per step:

- A named component moves every frontier node to its child of that name,
  creating it on demand.  A missing child is cloned from the wildcard child
  when one exists, so specific keys declared after a wildcard inherit the
  wildcard's policy; otherwise it is seeded from the parent's subtree
  defaults.
- A wildcard component moves to the wildcard child *and* every named child
  that already exists, so the rest of the path applies to all of them.

At the end of the path the option is applied to every frontier node:
``SINGLE_NODE`` writes the node option, ``SUBTREE`` writes the subtree
default on the node and overwrites that one kind on every descendant.

Legacy mode: ``[*]`` and ``[N*]`` carry an any-order marker.  ``[*]`` turns
``ANY_ORDER_MATCH`` on at the *parent* of the step (so every element of that
array is matched in any order) and ``[N*]`` turns it on at the index child.
These writes are collected while the step is computed and applied after it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from json_flex_assert.config.nodes import ConfigNode, ConfigTree, full_option_map
from json_flex_assert.config.parser import PathComponent, parse_path
from json_flex_assert.options import OptionKind, PathOption, Scope

__all__ = ["ConfigTreeBuilder", "PathApplication", "build_config_tree"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PathApplication:
    """A PathOption narrowed to a single path."""

    path: str | None
    kind: OptionKind
    active: bool
    scope: Scope


class ConfigTreeBuilder:
    """Applies PathOptions, in order, to one ConfigTree.

    Args:
        tree:        The tree to mutate.  A fresh ``ConfigTree()`` when None.
        legacy_mode: Honour the legacy any-order markers ``[*]`` / ``[N*]``.

    Example::

        builder = ConfigTreeBuilder()
        builder.create_or_update_node(CollectionEqualCount("items"))
        builder.create_or_update_node(AnyOrderMatch("items[*]"))
        tree = builder.tree
    """

    def __init__(self, tree: ConfigTree | None = None, legacy_mode: bool = False) -> None:
        self.tree = tree if tree is not None else ConfigTree()
        self.legacy_mode = legacy_mode

    def apply_all(self, options: Iterable[PathOption]) -> ConfigTree:
        for option in options:
            self.create_or_update_node(option)
        return self.tree

    def create_or_update_node(self, option: PathOption) -> None:
        """Apply every path of ``option`` to the tree."""
        for path in option.paths:
            self.apply(
                PathApplication(
                    path=path, kind=option.kind, active=option.active, scope=option.scope
                )
            )

    def apply(self, application: PathApplication) -> None:
        components = parse_path(application.path)
        frontier = [self.tree.root]
        for component in components:
            frontier = self._step(frontier, component)
        logger.debug(
            "applying %s=%s (%s) at %r to %d node(s)",
            application.kind,
            application.active,
            application.scope,
            application.path,
            len(frontier),
        )
        for node in frontier:
            if application.scope is Scope.SUBTREE:
                self._propagate_subtree_option(node, application.kind, application.active)
            else:
                node.node_options[application.kind] = application.active

    # ------------------------------------------------------------------
    # Walking
    # ------------------------------------------------------------------

    def _step(self, frontier: list[ConfigNode], component: PathComponent) -> list[ConfigNode]:
        """Advance the frontier by one component.

        Phase one computes the next frontier and the pending legacy any-order
        writes; phase two applies the writes.
        """
        next_frontier: list[ConfigNode] = []
        pending: list[ConfigNode] = []
        for node in frontier:
            if component.is_wildcard:
                child = self.tree.wildcard_of(node) or self.tree.add_wildcard(node)
                next_frontier.append(child)
                next_frontier.extend(self.tree.children(node))
            else:
                child = self._find_or_create_child(node, component.name)
                next_frontier.append(child)
            if self.legacy_mode and component.is_any_order:
                pending.append(node if component.is_wildcard else child)

        for target in pending:
            target.node_options[OptionKind.ANY_ORDER_MATCH] = True
        return next_frontier

    def _find_or_create_child(self, node: ConfigNode, name: str) -> ConfigNode:
        existing = self.tree.child(node, name)
        if existing is not None:
            return existing
        template = self.tree.wildcard_of(node)
        if template is None:
            return self.tree.add_child(node, name)
        clone = self.tree.deep_copy(template, name, node)
        node.children[name] = clone.node_id  # type: ignore[assignment]
        return clone

    # ------------------------------------------------------------------
    # Subtree propagation
    # ------------------------------------------------------------------

    def _propagate_subtree_option(self, node: ConfigNode, kind: OptionKind, active: bool) -> None:
        """Set ``kind``'s subtree default on ``node`` and everything below it.

        Only ``kind`` changes: other kinds' defaults and all node options keep
        their values, so more specific settings made earlier survive.
        """
        node.subtree_options[kind] = active
        wildcard = self.tree.wildcard_of(node)
        if wildcard is not None and kind not in wildcard.subtree_options:
            wildcard.subtree_options = full_option_map(wildcard.subtree_options)
        for descendant in self.tree.descendants(node):
            descendant.subtree_options[kind] = active


def build_config_tree(
    options: Iterable[PathOption],
    legacy_mode: bool = False,
    root_subtree_options: dict[OptionKind, bool] | None = None,
) -> ConfigTree:
    """Build a fresh ConfigTree from ``options`` applied in order."""
    builder = ConfigTreeBuilder(ConfigTree(root_subtree_options), legacy_mode=legacy_mode)
    return builder.apply_all(options)
