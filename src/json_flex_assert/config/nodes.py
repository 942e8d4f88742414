"""ConfigNode and ConfigTree: the per-call policy tree, stored as an arena.

Nodes live in one flat list owned by a ``ConfigTree`` and refer to each other
by integer id (``children`` maps name -> id, ``wildcard`` and ``parent`` are
ids).  Id 0 is always the root; copying a subtree is an explicit id remap.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from json_flex_assert.options import OptionKind

__all__ = ["ROOT_ID", "ConfigNode", "ConfigTree", "full_option_map"]

ROOT_ID = 0


def full_option_map(options: dict[OptionKind, bool] | None = None) -> dict[OptionKind, bool]:
    """Return a copy of ``options`` with every OptionKind present.

    Missing kinds default to inactive.
    """
    filled = dict(options) if options else {}
    for kind in OptionKind:
        filled.setdefault(kind, False)
    return filled


@dataclass(eq=False, slots=True)
class ConfigNode:
    """One position in the configuration tree.

    Attributes:
        name:            Key or decimal index; ``None`` for the root.
        node_options:    Options set for this node only.  Sparse.
        subtree_options: Defaults for this node and its descendants.  Always
                         holds every OptionKind (filled in ``__post_init__``).
        children:        Named children, name -> arena id.
        wildcard:        Arena id of the wildcard child, if any.
        parent:          Arena id of the parent; ``None`` for the root and for
                         detached final nodes.
        node_id:         This node's own arena id; ``None`` when detached.

    Equality and hashing consider only ``name``,
    ``node_options`` and ``subtree_options``: two nodes configured the same
    way compare equal regardless of what hangs below them.
    """

    name: str | None
    node_options: dict[OptionKind, bool] = field(default_factory=dict)
    subtree_options: dict[OptionKind, bool] = field(default_factory=dict)
    children: dict[str, int] = field(default_factory=dict)
    wildcard: int | None = None
    parent: int | None = None
    node_id: int | None = None

    def __post_init__(self) -> None:
        self.subtree_options = full_option_map(self.subtree_options)

    def _key(self) -> tuple[object, ...]:
        return (
            self.name,
            frozenset(self.node_options.items()),
            frozenset(self.subtree_options.items()),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigNode):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def as_final_node(self) -> ConfigNode:
        """A detached leaf standing in for an unconfigured child.

        It carries no node options and inherits this node's subtree
        defaults, which is exactly what an explicitly created child would
        have looked like.
        """
        return ConfigNode(name=None, subtree_options=dict(self.subtree_options))


class ConfigTree:
    """Arena of ConfigNodes for one assertion call.

    Built by ``ConfigTreeBuilder`` and only read by the comparator afterwards.

    Example::

        tree = ConfigTree()
        child = tree.add_child(tree.root, "items")
        tree.next_node(tree.root, "items") is child   # True
        tree.next_node(tree.root, "other")            # detached final node
    """

    def __init__(self, root_subtree_options: dict[OptionKind, bool] | None = None) -> None:
        self._nodes: list[ConfigNode] = []
        self._register(ConfigNode(name=None, subtree_options=dict(root_subtree_options or {})))

    # ------------------------------------------------------------------
    # Arena access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> ConfigNode:
        return self._nodes[ROOT_ID]

    def node(self, node_id: int) -> ConfigNode:
        return self._nodes[node_id]

    def _register(self, node: ConfigNode) -> ConfigNode:
        node.node_id = len(self._nodes)
        self._nodes.append(node)
        return node

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def child(self, node: ConfigNode, name: str) -> ConfigNode | None:
        """The explicitly configured child called ``name``, if any."""
        child_id = node.children.get(name)
        return None if child_id is None else self._nodes[child_id]

    def children(self, node: ConfigNode) -> list[ConfigNode]:
        return [self._nodes[child_id] for child_id in node.children.values()]

    def wildcard_of(self, node: ConfigNode) -> ConfigNode | None:
        return None if node.wildcard is None else self._nodes[node.wildcard]

    def next_node(self, node: ConfigNode, name: str) -> ConfigNode:
        """Config for the value at ``name`` below ``node``.

        Falls back from the named child to the wildcard child and finally to
        a detached final node carrying ``node``'s subtree defaults.
        """
        return self.child(node, name) or self.wildcard_of(node) or node.as_final_node()

    def descendants(self, node: ConfigNode) -> list[ConfigNode]:
        """Every node below ``node`` (named and wildcard), depth first."""
        found: list[ConfigNode] = []
        stack = self._direct(node)
        while stack:
            current = stack.pop()
            found.append(current)
            stack.extend(self._direct(current))
        return found

    def _direct(self, node: ConfigNode) -> list[ConfigNode]:
        direct = self.children(node)
        wildcard = self.wildcard_of(node)
        if wildcard is not None:
            direct.append(wildcard)
        return direct

    # ------------------------------------------------------------------
    # Mutation (builder phase only)
    # ------------------------------------------------------------------

    def add_child(self, parent: ConfigNode, name: str) -> ConfigNode:
        """Create a fresh named child seeded with ``parent``'s subtree defaults."""
        child = self._register(
            ConfigNode(
                name=name,
                subtree_options=dict(parent.subtree_options),
                parent=parent.node_id,
            )
        )
        parent.children[name] = child.node_id  # type: ignore[assignment]
        return child

    def add_wildcard(self, parent: ConfigNode) -> ConfigNode:
        """Create the wildcard child of ``parent`` (seeded like ``add_child``)."""
        wildcard = self._register(
            ConfigNode(
                name="*",
                subtree_options=dict(parent.subtree_options),
                parent=parent.node_id,
            )
        )
        parent.wildcard = wildcard.node_id
        return wildcard

    def deep_copy(self, node: ConfigNode, name: str | None, parent: ConfigNode) -> ConfigNode:
        """Clone ``node`` and everything below it, attaching the copy under ``parent``.

        The copy is renamed to ``name``.  It is registered in the arena but
        not linked into ``parent.children``; the caller decides where it goes.
        """
        copy = self._register(
            ConfigNode(
                name=name,
                node_options=dict(node.node_options),
                subtree_options=dict(node.subtree_options),
                parent=parent.node_id,
            )
        )
        for child_name, child_id in node.children.items():
            child_copy = self.deep_copy(self._nodes[child_id], child_name, copy)
            copy.children[child_name] = child_copy.node_id  # type: ignore[assignment]
        wildcard = self.wildcard_of(node)
        if wildcard is not None:
            copy.wildcard = self.deep_copy(wildcard, wildcard.name, copy).node_id
        return copy
