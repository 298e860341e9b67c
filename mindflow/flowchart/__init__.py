"""Flowchart geometry."""

from mindflow.flowchart.layout import (
    FlowchartLayout,
    PositionedNode,
    RoutedEdge,
    layout_flowchart,
)

__all__ = [
    "FlowchartLayout",
    "PositionedNode",
    "RoutedEdge",
    "layout_flowchart",
]
