# layout_adapter.py
# Description: Positions the mindmap through a pluggable layered layout engine
#
"""
Layout Adapter
--------------

Turns the structural graph into positioned nodes:
- LayoutSettings: box size and separation constants
- LayoutEngine: the capability an external layout algorithm must offer
  (box centers keyed by node id)
- LayeredTreeLayoutEngine: default layered tree layout built on networkx
- LayoutAdapter: calls the engine, converts centers to box corners and
  asks the view to fit everything (best effort)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import networkx as nx
from loguru import logger

from .mindmap_graph import (
    ROOT_ID,
    LayoutOrientation,
    MindmapEdge,
    MindmapNode,
    PositionedNode,
    build_tree_graph,
)


@dataclass(frozen=True)
class LayoutSettings:
    """Fixed box size and spacing used by the layout"""
    node_width: float = 180
    node_height: float = 50
    node_separation: float = 30
    rank_separation: float = 120


class LayoutEngine(ABC):
    """Capability for computing node positions"""

    @abstractmethod
    def layout(self,
               nodes: Sequence[MindmapNode],
               edges: Sequence[MindmapEdge],
               orientation: LayoutOrientation) -> Dict[str, Tuple[float, float]]:
        """Return the center point of every node box, keyed by node id"""


class LayeredTreeLayoutEngine(LayoutEngine):
    """Layered tree layout.

    Depth in the tree picks the rank (column for horizontal, row for
    vertical). Leaves are stacked along the other axis in depth-first
    order and every parent is centered on its first and last child.
    """

    def __init__(self, settings: Optional[LayoutSettings] = None, root_id: str = ROOT_ID):
        self.settings = settings or LayoutSettings()
        self.root_id = root_id

    def _extents(self, orientation: LayoutOrientation) -> Tuple[float, float]:
        """(extent along the rank axis, extent along the sibling axis)"""
        s = self.settings
        if orientation is LayoutOrientation.HORIZONTAL:
            return s.node_width, s.node_height
        return s.node_height, s.node_width

    def layout(self, nodes, edges, orientation):
        tree = build_tree_graph(nodes, edges, self.root_id)
        if tree is None:
            logger.warning("Layout requested for a graph without a root")
            return {}

        rank_extent, breadth_extent = self._extents(orientation)
        rank_step = rank_extent + self.settings.rank_separation
        breadth_step = breadth_extent + self.settings.node_separation

        breadth: Dict[str, float] = {}
        leaf_index = 0
        for node_id in nx.dfs_postorder_nodes(tree, self.root_id):
            children = list(tree.successors(node_id))
            if not children:
                breadth[node_id] = leaf_index * breadth_step
                leaf_index += 1
            else:
                breadth[node_id] = (breadth[children[0]] + breadth[children[-1]]) / 2

        depths = nx.shortest_path_length(tree, source=self.root_id)
        centers: Dict[str, Tuple[float, float]] = {}
        for node_id, depth in depths.items():
            along_rank = depth * rank_step + rank_extent / 2
            along_breadth = breadth[node_id] + breadth_extent / 2
            if orientation is LayoutOrientation.HORIZONTAL:
                centers[node_id] = (along_rank, along_breadth)
            else:
                centers[node_id] = (along_breadth, along_rank)

        logger.debug(f"Layered layout ({orientation.rankdir}) placed {len(centers)} nodes")
        return centers


FitViewRequest = Callable[[List[PositionedNode]], None]


class LayoutAdapter:
    """Recomputes positions for the whole graph"""

    def __init__(self,
                 engine: Optional[LayoutEngine] = None,
                 settings: Optional[LayoutSettings] = None,
                 fit_view: Optional[FitViewRequest] = None):
        self.settings = settings or LayoutSettings()
        self.engine = engine or LayeredTreeLayoutEngine(self.settings)
        self.fit_view = fit_view

    def layout(self,
               nodes: Sequence[MindmapNode],
               edges: Sequence[MindmapEdge],
               orientation: LayoutOrientation) -> List[PositionedNode]:
        """Position every node

        Args:
            nodes: Full node set
            edges: Full edge set
            orientation: Current layout orientation

        Returns:
            Positioned nodes in node order, coordinates are box top-left corners
        """
        centers = self.engine.layout(nodes, edges, orientation)
        half_w = self.settings.node_width / 2
        half_h = self.settings.node_height / 2

        positioned = []
        for node in nodes:
            center = centers.get(node.id)
            if center is None:
                logger.warning(f"Layout engine gave no position for node {node.id}")
                positioned.append(PositionedNode(node, 0.0, 0.0))
                continue
            positioned.append(PositionedNode(node, center[0] - half_w, center[1] - half_h))

        self.request_fit_view(positioned)
        return positioned

    def request_fit_view(self, positioned: List[PositionedNode]) -> None:
        """Ask the view to frame all nodes; failures are ignored"""
        if self.fit_view is None:
            return
        try:
            self.fit_view(positioned)
        except Exception as e:
            logger.debug(f"Fit view request failed: {e}")
