"""Link fill color resolution.

Three mutually exclusive modes, checked in priority order:

1. ``MATCH_NODE_COLORS``: every link takes the color of its source or
   destination node. Only the match-target dropdown is exposed.
2. ``INDIVIDUAL_COLORS``: one color slice per link, keyed by the link's
   selection id.
3. ``UNIFORM``: a single wildcard color slice drives all links.

The dynamic part of the card is discarded and rebuilt on every call so no
per-link slice survives a mode switch.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from sankey_format.entities import SankeyLink, display_label, owner_selector
from sankey_format.formatting.slices import ColorPicker, Selector
from sankey_format.utils.config import settings

if TYPE_CHECKING:
    from sankey_format.settings import LinkColorSettings

logger = logging.getLogger(__name__)

UNIFORM_INSTANCE_KIND = "ConstantOrRule"


class LinkColorModeError(ValueError):
    """Raised when a mode and match target cannot be combined."""


class LinkColorMode(str, Enum):
    MATCH_NODE_COLORS = "matchNodeColors"
    INDIVIDUAL_COLORS = "setIndividualColors"
    UNIFORM = "uniform"


class LinkMatchTarget(str, Enum):
    SOURCE = "source"
    DESTINATION = "destination"

    @classmethod
    def parse(cls, value: object) -> "LinkMatchTarget":
        try:
            return cls(value)
        except ValueError as exc:
            raise LinkColorModeError(f"Unknown link match target: {value!r}") from exc


def link_label(link: SankeyLink) -> str:
    return f"{display_label(link.source)} - {display_label(link.destination)}"


def _match_color(link: SankeyLink, target: LinkMatchTarget) -> Optional[str]:
    node = link.source if target is LinkMatchTarget.SOURCE else link.destination
    if node is None:
        return None
    return node.fill_color


def _apply_match_colors(links: Sequence[SankeyLink], target: LinkMatchTarget) -> None:
    for link in links:
        color = _match_color(link, target)
        if color is None:
            logger.warning("No %s color for link %s; keeping %s", target.value, link_label(link), link.fill_color)
            continue
        link.fill_color = color


def _individual_slices(links: Sequence[SankeyLink]) -> list[ColorPicker]:
    return [
        ColorPicker(
            name="fill",
            display_name=link_label(link),
            value=link.fill_color,
            selector=owner_selector(link.selection_id, f"link-{index}"),
        )
        for index, link in enumerate(links)
    ]


def _uniform_slice(links: Sequence[SankeyLink], fallback: str) -> ColorPicker:
    first = links[0].fill_color if links else None
    return ColorPicker(
        name="fill",
        display_name="Link Color",
        display_name_key="Visual_LinkColor",
        value=first or fallback,
        selector=Selector.data_view_wildcard(),
        instance_kind=UNIFORM_INSTANCE_KIND,
    )


def resolve_link_colors(
    card: "LinkColorSettings",
    links: Optional[Sequence[SankeyLink]],
    mode: Optional[LinkColorMode] = None,
    match_target: Optional[LinkMatchTarget] = None,
    uniform_color: Optional[str] = None,
) -> LinkColorMode:
    """Rebuild the link color card for the active mode and return that mode.

    ``mode`` and ``match_target`` switch the card's controls before resolving;
    when omitted the card's current control values decide.
    """
    if mode is not None or match_target is not None:
        card.set_mode(mode if mode is not None else card.mode, match_target)

    links = list(links or [])
    active = card.mode

    card.slices[:] = card.base_slices()
    card.match_source_or_destination.visible = False
    card.set_individual_colors.visible = True

    if active is LinkColorMode.MATCH_NODE_COLORS:
        card.set_individual_colors.visible = False
        card.match_source_or_destination.visible = True
        _apply_match_colors(links, card.match_target)
    elif active is LinkColorMode.INDIVIDUAL_COLORS:
        card.slices.extend(_individual_slices(links))
    else:
        fallback = uniform_color or settings.fallback_link_color
        card.slices.append(_uniform_slice(links, fallback))

    logger.debug("Resolved %d links in %s mode", len(links), active.value)
    return active
