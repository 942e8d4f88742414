"""Option resolution: the effective policy for one value position.

``resolve_option`` walks a fixed precedence chain and returns the first value
it finds:

1. node options of the node itself
2. node options of the node's wildcard child
3. node options of the parent
4. subtree default of the node (then its wildcard child, then the parent)

Step 3 lets an array declare a rule for all of its direct elements while one
element overrides it locally (step 1).  Subtree maps are always complete, so
step 4 always yields a value.
"""

from __future__ import annotations

from json_flex_assert.config.nodes import ConfigNode, ConfigTree
from json_flex_assert.options import OptionKind

__all__ = ["own_option", "resolve_option"]


def resolve_option(
    kind: OptionKind,
    node: ConfigNode,
    parent: ConfigNode,
    tree: ConfigTree,
) -> bool:
    """Return whether ``kind`` is active for the value at ``node``.

    Args:
        kind:   The option being resolved.
        node:   Config node of the position (possibly a detached final node).
        parent: Config node of the enclosing container; the root passes
                itself.
        tree:   The arena ``node`` belongs to, used to reach its wildcard child.
    """
    wildcard = tree.wildcard_of(node)

    if kind in node.node_options:
        return node.node_options[kind]
    if wildcard is not None and kind in wildcard.node_options:
        return wildcard.node_options[kind]
    if kind in parent.node_options:
        return parent.node_options[kind]

    for source in (node, wildcard, parent):
        if source is not None and kind in source.subtree_options:
            return source.subtree_options[kind]
    # Unreachable while subtree maps stay fully populated.
    return False


def own_option(kind: OptionKind, node: ConfigNode) -> bool:
    """Return ``kind`` as configured on ``node`` alone.

    Used for options that describe a container itself (its element count)
    rather than a value inside it: the node option wins, else the node's
    subtree default.  Parent options do not leak in.
    """
    if kind in node.node_options:
        return node.node_options[kind]
    return node.subtree_options.get(kind, False)
