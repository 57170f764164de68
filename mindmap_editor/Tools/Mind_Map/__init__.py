# __init__.py
# Description: Mind Map editing core
#
"""
Mind Map Tools
-------------

Editing core for a single-rooted mindmap.

Main components:
- GraphStore: Current nodes and edges
- LayoutAdapter: Positions from a pluggable layered layout engine
- TreeOperations: Insert, delete, reset and relabel
- next_selection: Arrow-key navigation
- StructuralCodec / CsvOutlineExporter: Text round-trip and CSV outline
- MindmapModel: One editing session
- MindmapRenderer: Terminal rendering
"""

from .mindmap_graph import (
    ROOT_ID,
    DEFAULT_LABEL,
    Direction,
    LayoutOrientation,
    MindmapNode,
    MindmapEdge,
    PositionedNode,
    NodeIdFactory,
    MindmapError,
    UserGuidanceError,
    MalformedImportError,
    EmptyExportError,
)

from .graph_store import GraphStore, validate_tree

from .layout_adapter import (
    LayoutSettings,
    LayoutEngine,
    LayeredTreeLayoutEngine,
    LayoutAdapter,
)

from .tree_operations import TreeOperations, DeletionResult

from .navigator import next_selection

from .mindmap_exporter import StructuralCodec, CsvOutlineExporter, ImportedGraph

from .mindmap_model import MindmapModel, SelectionCursor

from .mindmap_renderer import MindmapRenderer

__all__ = [
    # Graph types
    'ROOT_ID',
    'DEFAULT_LABEL',
    'Direction',
    'LayoutOrientation',
    'MindmapNode',
    'MindmapEdge',
    'PositionedNode',
    'NodeIdFactory',

    # Errors
    'MindmapError',
    'UserGuidanceError',
    'MalformedImportError',
    'EmptyExportError',

    # Store
    'GraphStore',
    'validate_tree',

    # Layout
    'LayoutSettings',
    'LayoutEngine',
    'LayeredTreeLayoutEngine',
    'LayoutAdapter',

    # Edits and navigation
    'TreeOperations',
    'DeletionResult',
    'next_selection',

    # Codecs
    'StructuralCodec',
    'CsvOutlineExporter',
    'ImportedGraph',

    # Session and rendering
    'MindmapModel',
    'SelectionCursor',
    'MindmapRenderer',
]
