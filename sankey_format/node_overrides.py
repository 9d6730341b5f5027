"""Per-node color overrides for the Nodes card.

Overrides only accumulate: a node that drops out of the data keeps its
color slice so that toggling "show all" off and on again loses no edits.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from sankey_format.entities import SankeyNode, display_label, owner_selector
from sankey_format.formatting.slices import ColorPicker

if TYPE_CHECKING:
    from sankey_format.settings import NodesSettings

logger = logging.getLogger(__name__)


def populate_node_color_overrides(card: "NodesSettings", nodes: Sequence[SankeyNode], show_all: bool) -> None:
    """Append one color slice per node label not already present on ``card``."""
    if not show_all or not nodes:
        return

    existing = {s.display_name for s in card.dynamic_slices()}
    added = 0
    for node in nodes:
        label = display_label(node)
        if label in existing:
            continue
        card.slices.append(
            ColorPicker(
                name="fill",
                display_name=label,
                value=node.fill_color,
                selector=owner_selector(node.selection_id, node.id),
            )
        )
        existing.add(label)
        added += 1

    logger.debug("Node color overrides: %d added, %d total", added, len(existing))
