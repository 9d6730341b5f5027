"""Formatting settings for the Sankey diagram visual."""
from sankey_format.entities import NodeLabel, SankeyLink, SankeyNode, SelectionId
from sankey_format.link_colors import LinkColorMode, LinkColorModeError, LinkMatchTarget, resolve_link_colors
from sankey_format.node_overrides import populate_node_color_overrides
from sankey_format.service import populate_settings_model
from sankey_format.settings import SankeyDiagramSettings

__all__ = [
    "NodeLabel",
    "SankeyLink",
    "SankeyNode",
    "SelectionId",
    "LinkColorMode",
    "LinkColorModeError",
    "LinkMatchTarget",
    "resolve_link_colors",
    "populate_node_color_overrides",
    "populate_settings_model",
    "SankeyDiagramSettings",
]
