# mindmap_exporter.py
# Description: Text and CSV export of the mindmap graph
#
"""
Mindmap Exporter
---------------

Two codecs:
- StructuralCodec: full-fidelity JSON text (orientation, nodes, edges),
  pasted back in through the import dialog
- CsvOutlineExporter: one row per root-to-leaf label path, with repeated
  leading cells blanked out (export only)
"""

import csv
import io
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from .graph_store import validate_tree
from .mindmap_graph import (
    DEFAULT_LABEL,
    NODE_TYPE,
    ROOT_ID,
    EmptyExportError,
    LayoutOrientation,
    MalformedImportError,
    MindmapEdge,
    MindmapNode,
    children_map,
    edge_id_for,
)


CSV_FILENAME = "mindmap.csv"
UTF8_BOM = "\ufeff"

EMPTY_IMPORT_MESSAGE = "Paste the mindmap text first."
MALFORMED_IMPORT_MESSAGE = "This is not valid mindmap data."
EMPTY_EXPORT_MESSAGE = "There is nothing to export yet."

REQUIRED_FIELDS = ('layoutDirection', 'nodes', 'edges')


@dataclass(frozen=True)
class ImportedGraph:
    """Result of a successful structural import"""
    orientation: LayoutOrientation
    nodes: List[MindmapNode]
    edges: List[MindmapEdge]


class StructuralCodec:
    """Round-trippable JSON text form of the whole graph"""

    @staticmethod
    def to_text(nodes: Sequence[MindmapNode],
                edges: Sequence[MindmapEdge],
                orientation: LayoutOrientation,
                positions: Optional[Mapping[str, Tuple[float, float]]] = None) -> str:
        """Serialize the graph

        Args:
            nodes: Node set
            edges: Edge set
            orientation: Current layout orientation
            positions: Optional node id -> (x, y), written for reference only

        Returns:
            Pretty-printed JSON string
        """
        positions = positions or {}
        data = {
            'layoutDirection': LayoutOrientation(orientation).value,
            'nodes': [
                {
                    'id': node.id,
                    'type': node.node_type,
                    'data': {'label': node.label, 'id': node.id},
                    'position': dict(zip(('x', 'y'), positions.get(node.id, (0, 0)))),
                }
                for node in nodes
            ],
            'edges': [
                {'id': edge.id, 'source': edge.source, 'target': edge.target}
                for edge in edges
            ],
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    @classmethod
    def from_text(cls, text: str) -> ImportedGraph:
        """Parse pasted text back into a graph

        Positions in the text are ignored; they are always recomputed.

        Raises:
            MalformedImportError: If the text is empty, not JSON, lacks a
                required field or does not describe a single-rooted tree
        """
        if not text or not text.strip():
            raise MalformedImportError(EMPTY_IMPORT_MESSAGE)

        try:
            data = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.error(f"Import failed, invalid JSON: {e}")
            raise MalformedImportError(MALFORMED_IMPORT_MESSAGE) from e

        if not isinstance(data, dict) or any(data.get(name) in (None, "") for name in REQUIRED_FIELDS):
            logger.error("Import failed, required fields missing")
            raise MalformedImportError(MALFORMED_IMPORT_MESSAGE)

        try:
            orientation = LayoutOrientation(data['layoutDirection'])
        except ValueError as e:
            raise MalformedImportError(f"Unknown layout direction: {data['layoutDirection']!r}") from e

        if not isinstance(data['nodes'], list) or not isinstance(data['edges'], list):
            raise MalformedImportError(MALFORMED_IMPORT_MESSAGE)

        nodes = [cls._node_from_dict(entry, i) for i, entry in enumerate(data['nodes'])]
        edges = [cls._edge_from_dict(entry, i) for i, entry in enumerate(data['edges'])]

        is_valid, errors = validate_tree(nodes, edges)
        if not is_valid:
            logger.error(f"Import failed, graph is not a tree: {errors}")
            raise MalformedImportError(f"{MALFORMED_IMPORT_MESSAGE} {errors[0]}")

        logger.info(f"Parsed mindmap text: {len(nodes)} nodes, {len(edges)} edges, {orientation.value}")
        return ImportedGraph(orientation=orientation, nodes=nodes, edges=edges)

    @staticmethod
    def _node_from_dict(entry: Any, index: int) -> MindmapNode:
        if not isinstance(entry, dict) or entry.get('id') in (None, ""):
            raise MalformedImportError(f"Node {index}: missing required field 'id'")
        node_data = entry.get('data') or {}
        if not isinstance(node_data, dict):
            raise MalformedImportError(f"Node {index}: 'data' must be an object")
        label = node_data.get('label', "")
        return MindmapNode(
            id=str(entry['id']),
            label="" if label is None else str(label),
            node_type=str(entry.get('type') or NODE_TYPE),
        )

    @staticmethod
    def _edge_from_dict(entry: Any, index: int) -> MindmapEdge:
        if not isinstance(entry, dict):
            raise MalformedImportError(f"Edge {index}: must be an object")
        for name in ('source', 'target'):
            if entry.get(name) in (None, ""):
                raise MalformedImportError(f"Edge {index}: missing required field '{name}'")
        source, target = str(entry['source']), str(entry['target'])
        return MindmapEdge(id=str(entry.get('id') or edge_id_for(source, target)),
                           source=source, target=target)


class CsvOutlineExporter:
    """Hierarchical CSV outline of the mindmap"""

    @staticmethod
    def outline_paths(nodes: Sequence[MindmapNode],
                      edges: Sequence[MindmapEdge],
                      root_id: str = ROOT_ID) -> List[List[str]]:
        """Label paths from the root to every leaf, depth-first in edge order"""
        labels: Dict[str, str] = {node.id: node.label for node in nodes}
        if root_id not in labels:
            return []

        mapping = children_map(edges)
        paths: List[List[str]] = []
        stack = [(root_id, [labels[root_id]])]
        while stack:
            node_id, path = stack.pop()
            children = [child for child in mapping.get(node_id, []) if child in labels]
            if not children:
                paths.append(path)
                continue
            for child in reversed(children):
                stack.append((child, path + [labels[child]]))
        return paths

    @staticmethod
    def compress_paths(paths: Sequence[Sequence[str]]) -> List[List[str]]:
        """Blank out the cells a path shares with the previous one

        Only the leading run of equal cells is blanked; from the first
        differing position on every cell is written out.
        """
        rows: List[List[str]] = []
        previous: Sequence[str] = []
        for path in paths:
            row = []
            diverged = False
            for i, cell in enumerate(path):
                if not diverged and i < len(previous) and cell == previous[i]:
                    row.append("")
                else:
                    diverged = True
                    row.append(cell)
            rows.append(row)
            previous = path
        return rows

    @classmethod
    def to_csv(cls,
               nodes: Sequence[MindmapNode],
               edges: Sequence[MindmapEdge],
               root_id: str = ROOT_ID,
               default_label: str = DEFAULT_LABEL) -> str:
        """Export the outline as CSV text

        Returns:
            CSV content prefixed with a UTF-8 byte-order mark

        Raises:
            EmptyExportError: If the graph is still the untouched default root
        """
        if len(nodes) <= 1 and (not nodes or nodes[0].label == default_label):
            raise EmptyExportError(EMPTY_EXPORT_MESSAGE)

        paths = cls.outline_paths(nodes, edges, root_id)
        rows = cls.compress_paths(paths)
        max_depth = max((len(path) for path in paths), default=0)

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow([f"Level {i + 1}" for i in range(max_depth)])
        for row in rows:
            writer.writerow(row + [""] * (max_depth - len(row)))

        logger.info(f"Exported CSV outline: {len(rows)} rows, depth {max_depth}")
        return UTF8_BOM + buffer.getvalue()

    @staticmethod
    def save_to_file(content: str, filepath: Path, encoding: str = 'utf-8') -> Path:
        """Save exported content to file

        Args:
            content: Content to save
            filepath: Path to save to
            encoding: File encoding

        Returns:
            The path written
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding=encoding) as f:
            f.write(content)
        logger.info(f"Saved export to {filepath}")
        return filepath
