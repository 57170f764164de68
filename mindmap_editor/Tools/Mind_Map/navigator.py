# navigator.py
# Description: Arrow-key navigation over the mindmap tree
#
"""
Directional Navigator
---------------------

Maps an arrow key onto a tree relation. The orientation decides which
pair of arrows walks along the tree (parent / first child); the other pair
always moves between siblings.
"""

from typing import Optional, Sequence

from loguru import logger

from .mindmap_graph import (
    Direction,
    LayoutOrientation,
    MindmapEdge,
    MindmapNode,
    child_edges,
    parent_edge,
)


# orientation -> (toward parent, toward first child, previous sibling, next sibling)
_KEYMAP = {
    LayoutOrientation.VERTICAL: (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT),
    LayoutOrientation.HORIZONTAL: (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN),
}


def next_selection(nodes: Sequence[MindmapNode],
                   edges: Sequence[MindmapEdge],
                   selected_id: Optional[str],
                   direction: Direction,
                   orientation: LayoutOrientation) -> Optional[str]:
    """Work out which node an arrow key moves the selection to

    Args:
        nodes: Current nodes
        edges: Current edges; sibling order is edge order
        selected_id: Currently selected node, if any
        direction: Arrow pressed
        orientation: Current layout orientation

    Returns:
        Id of the node to select, or None when the selection should stay put
    """
    if selected_id is None or not any(node.id == selected_id for node in nodes):
        return None

    to_parent, to_child, to_previous, to_next = _KEYMAP[LayoutOrientation(orientation)]
    direction = Direction(direction)
    incoming = parent_edge(edges, selected_id)

    target = None
    if direction is to_parent:
        target = incoming.source if incoming else None
    elif direction is to_child:
        outgoing = child_edges(edges, selected_id)
        target = outgoing[0].target if outgoing else None
    elif incoming is not None:
        siblings = child_edges(edges, incoming.source)
        index = next(i for i, edge in enumerate(siblings) if edge.target == selected_id)
        if direction is to_previous and index > 0:
            target = siblings[index - 1].target
        elif direction is to_next and index < len(siblings) - 1:
            target = siblings[index + 1].target

    logger.debug(f"Navigate {direction.value} from {selected_id} -> {target}")
    return target
