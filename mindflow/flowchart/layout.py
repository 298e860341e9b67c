"""
Layered flowchart layout.

Nodes are grouped into horizontal layers by step_order; each layer is centred
on the canvas and laid out left to right in input order. y grows with
step_order, so gaps in the numbering leave empty bands. Edges are routed as
cubic Bézier curves from the bottom of the source box to the top of the
target box; edges naming an unknown node are left out.

The layout is a pure function of its inputs and never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from mindflow.schemas.curriculum import FlowEdge, FlowNode

CANVAS_WIDTH = 800
NODE_WIDTH = 160
NODE_HEIGHT = 60
NODE_GAP = 40
LEVEL_HEIGHT = 150
CURVE_PULL = 100


@dataclass(frozen=True)
class PositionedNode:
    """A node and the centre of its box."""
    node: FlowNode
    x: float
    y: float

    @property
    def id(self) -> str:
        return self.node.id


@dataclass(frozen=True)
class RoutedEdge:
    """An edge whose both endpoints were found, with its drawing geometry."""
    edge: FlowEdge
    start: Tuple[float, float]
    end: Tuple[float, float]
    path: str
    label_anchor: Tuple[float, float]


@dataclass(frozen=True)
class FlowchartLayout:
    nodes: Tuple[PositionedNode, ...]
    edges: Tuple[RoutedEdge, ...]
    width: float
    height: float
    node_width: float
    node_height: float

    def position_of(self, node_id: str) -> Optional[PositionedNode]:
        """First positioned node with this id, like the edge router uses."""
        for positioned in self.nodes:
            if positioned.id == node_id:
                return positioned
        return None

    def layers(self) -> Dict[int, List[PositionedNode]]:
        """Positioned nodes keyed by step_order (ascending), each layer left to right."""
        grouped: Dict[int, List[PositionedNode]] = {}
        for positioned in self.nodes:
            grouped.setdefault(positioned.node.step_order, []).append(positioned)
        return {step: grouped[step] for step in sorted(grouped)}


def layer_centres(count: int, canvas_width: float, node_width: float, gap: float) -> List[float]:
    """x centres for `count` boxes centred as a group on the canvas."""
    if count <= 0:
        return []
    group_width = count * node_width + (count - 1) * gap
    first = (canvas_width - group_width) / 2 + node_width / 2
    return [first + i * (node_width + gap) for i in range(count)]


def _route(edge: FlowEdge, start: PositionedNode, end: PositionedNode, node_height: float) -> RoutedEdge:
    sx, sy = start.x, start.y
    tx, ty = end.x, end.y
    half = node_height / 2
    path = (
        f"M {sx:g} {sy + half:g} "
        f"C {sx:g} {sy + CURVE_PULL:g}, {tx:g} {ty - CURVE_PULL:g}, {tx:g} {ty - half:g}"
    )
    return RoutedEdge(
        edge=edge,
        start=(sx, sy),
        end=(tx, ty),
        path=path,
        label_anchor=((sx + tx) / 2, (sy + ty) / 2),
    )


def layout_flowchart(
    nodes: Sequence[FlowNode],
    edges: Iterable[FlowEdge] = (),
    *,
    canvas_width: float = CANVAS_WIDTH,
    node_width: float = NODE_WIDTH,
    node_height: float = NODE_HEIGHT,
    gap: float = NODE_GAP,
    level_height: float = LEVEL_HEIGHT,
) -> FlowchartLayout:
    """
    Compute node centres and edge paths.

    Args:
        nodes: flowchart nodes; step_order selects the layer
        edges: directed edges; unknown endpoints are skipped silently
        canvas_width: W, layers are centred on W / 2

    Returns:
        FlowchartLayout with one PositionedNode per input node (input order)
        and one RoutedEdge per resolvable edge. Height is
        (max step_order + 1) * level_height, or 0 for no nodes.
    """
    # Layer membership as input indices, so duplicates keep distinct slots
    layers: Dict[int, List[int]] = {}
    for index, node in enumerate(nodes):
        layers.setdefault(node.step_order, []).append(index)

    xs: Dict[int, float] = {}
    for members in layers.values():
        for index, x in zip(members, layer_centres(len(members), canvas_width, node_width, gap)):
            xs[index] = x

    positioned = tuple(
        PositionedNode(node=node, x=xs[index], y=node.step_order * level_height)
        for index, node in enumerate(nodes)
    )

    by_id: Dict[str, PositionedNode] = {}
    for p in positioned:
        by_id.setdefault(p.id, p)

    routed: List[RoutedEdge] = []
    for edge in edges:
        start = by_id.get(edge.from_id)
        end = by_id.get(edge.to_id)
        if start is None or end is None:
            continue
        routed.append(_route(edge, start, end, node_height))

    height = (max(layers) + 1) * level_height if layers else 0
    return FlowchartLayout(
        nodes=positioned,
        edges=tuple(routed),
        width=canvas_width,
        height=height,
        node_width=node_width,
        node_height=node_height,
    )
