"""Data-bound diagram entities supplied by the host on each update."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sankey_format.formatting.slices import Selector


@dataclass(frozen=True)
class SelectionId:
    key: str

    def get_selector(self) -> Selector:
        return Selector(key=self.key)


@dataclass
class NodeLabel:
    name: str
    formatted_name: str = ""

    def __post_init__(self) -> None:
        if not self.formatted_name:
            self.formatted_name = self.name


@dataclass
class SankeyNode:
    id: str
    label: NodeLabel
    fill_color: Optional[str] = None
    selection_id: Optional[SelectionId] = None


@dataclass
class SankeyLink:
    source: Optional[SankeyNode]
    destination: Optional[SankeyNode]
    fill_color: Optional[str] = None
    selection_id: Optional[SelectionId] = None


def owner_selector(selection_id: Optional[SelectionId], fallback_key: str) -> Selector:
    if selection_id is not None:
        return selection_id.get_selector()
    return Selector(key=fallback_key)


def display_label(node: Optional[SankeyNode]) -> str:
    if node is None or node.label is None:
        return ""
    return node.label.formatted_name or node.label.name
