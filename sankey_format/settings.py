"""Formatting settings of the Sankey diagram visual.

``SankeyDiagramSettings`` is created once by the host integration and kept
across data updates. ``refresh`` is the only entry point that mutates the
dynamic cards.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator, List, Optional, Sequence

from sankey_format.entities import SankeyLink, SankeyNode
from sankey_format.formatting.cards import (
    DEFAULT_FONT_FILL,
    DEFAULT_FONT_SIZE,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    Card,
    CompositeCard,
    FontGroup,
    SimpleCard,
)
from sankey_format.formatting.export import Localizer, export_formatting_model
from sankey_format.formatting.slices import (
    AutoDropdown,
    ColorPicker,
    EnumMember,
    ItemDropdown,
    NumUpDown,
    ReadOnlyText,
    Slice,
    ToggleSwitch,
)
from sankey_format.link_colors import LinkColorMode, LinkColorModeError, LinkMatchTarget, resolve_link_colors
from sankey_format.node_overrides import populate_node_color_overrides
from sankey_format.persistence import (
    NodePosition,
    ViewportSize,
    decode_node_positions,
    decode_viewport_size,
    encode_node_positions,
    encode_viewport_size,
)
from sankey_format.schemas import FormattingModel

logger = logging.getLogger(__name__)


class CyclesDrawType(IntEnum):
    DUPLICATE = 0
    BACKWARD = 1
    DUPLICATE_OPTIMIZED = 2


class ButtonPosition(str, Enum):
    TOP = "Top"
    TOP_CENTER = "TopCenter"
    TOP_RIGHT = "TopRight"
    BOTTOM = "Bottom"
    BOTTOM_CENTER = "BottomCenter"
    BOTTOM_RIGHT = "BottomRight"


class FontSettingsOptions:
    DEFAULT_FONT_SIZE = DEFAULT_FONT_SIZE
    MIN_FONT_SIZE = MIN_FONT_SIZE
    MAX_FONT_SIZE = MAX_FONT_SIZE
    DEFAULT_FONT_FAMILY = "Arial"
    DEFAULT_NORMAL_VALUE = "normal"
    BOLD_VALUE = "bold"
    ITALIC_VALUE = "italic"
    UNDERLINE_VALUE = "underline"
    DEFAULT_NONE_VALUE = "none"
    DEFAULT_FILL_VALUE = DEFAULT_FONT_FILL


class NodeWidthDefaultOptions:
    DEFAULT_WIDTH = 10
    MIN_WIDTH = 10
    MAX_WIDTH = 30


@dataclass(frozen=True)
class ButtonDefaults:
    fill: str = "#DCDCDC"
    stroke: str = "#A9A9A9"
    text_fill: str = "#333"
    text: str = "Reset"
    width: int = 40
    height: int = 15


BUTTON_DEFAULTS = ButtonDefaults()

BUTTON_POSITION_OPTIONS: List[EnumMember] = [
    EnumMember(ButtonPosition.TOP.value, display_name_key="Visual_Top"),
    EnumMember(ButtonPosition.TOP_CENTER.value, display_name_key="Visual_TopCenter"),
    EnumMember(ButtonPosition.TOP_RIGHT.value, display_name_key="Visual_TopRight"),
    EnumMember(ButtonPosition.BOTTOM.value, display_name_key="Visual_Bottom"),
    EnumMember(ButtonPosition.BOTTOM_CENTER.value, display_name_key="Visual_BottomCenter"),
    EnumMember(ButtonPosition.BOTTOM_RIGHT.value, display_name_key="Visual_BottomRight"),
]

DUPLICATE_NODES_OPTIONS: List[EnumMember] = [
    EnumMember(int(CyclesDrawType.DUPLICATE), display_name_key="Visual_Duplicate"),
    EnumMember(int(CyclesDrawType.BACKWARD), display_name_key="Visual_DrawBackwardLink"),
    EnumMember(int(CyclesDrawType.DUPLICATE_OPTIMIZED), display_name_key="Visual_DuplicateOptimized"),
]

MATCH_TARGET_OPTIONS: List[EnumMember] = [
    EnumMember(LinkMatchTarget.SOURCE.value, display_name="Source", display_name_key="Visual_MatchColorTo_Source"),
    EnumMember(
        LinkMatchTarget.DESTINATION.value,
        display_name="Destination",
        display_name_key="Visual_MatchColorTo_Destination",
    ),
]


@dataclass
class ScaleFactors:
    x: float = 1
    y: float = 1


class DataLabelsSettings(CompositeCard):
    def __init__(self) -> None:
        super().__init__()
        self.name = "labels"
        self.display_name_key = "Visual_DataPointsLabels"
        self.show = ToggleSwitch(name="show", display_name_key="Visual_Show", value=True)
        self.font = FontGroup(self.name)
        self.unit = AutoDropdown(
            name="unit",
            display_name="Display units",
            display_name_key="Visual_Display_Units",
            value=0,
        )
        self.force_display = ToggleSwitch(
            name="forceDisplay",
            display_name="Force display",
            display_name_key="Visual_Force_Display",
            description="Display all labels anyway",
            description_key="Visual_Description_Force_Display",
            value=False,
        )
        self.font.add(self.unit, self.force_display)
        self.top_level_slice = self.show
        self.groups = [self.font.group]


class LinkLabelsSettings(CompositeCard):
    DEFAULT_FONT_SIZE = 9

    def __init__(self) -> None:
        super().__init__()
        self.name = "linkLabels"
        self.display_name_key = "Visual_DataPointsLinkLabels"
        self.show = ToggleSwitch(name="show", display_name_key="Visual_Show", value=False)
        self.font = FontGroup(self.name, self.DEFAULT_FONT_SIZE)
        self.top_level_slice = self.show
        self.groups = [self.font.group]


class LinkColorSettings(SimpleCard):
    """Link fill controls. Slices after the three base controls are generated."""

    def __init__(self) -> None:
        super().__init__()
        self.name = "linkColors"
        self.display_name = "Fill"
        self.display_name_key = "Visual_LinkColors"
        self.match_node_colors = ToggleSwitch(
            name="matchNodeColors",
            display_name="Match Node Colors",
            display_name_key="Visual_LinkMatchNodeColors",
            value=True,
        )
        self.match_source_or_destination = ItemDropdown(
            name="matchSourceOrDestination",
            display_name="Match Color To",
            display_name_key="Visual_MatchColorTo",
            items=MATCH_TARGET_OPTIONS,
            value=MATCH_TARGET_OPTIONS[0],
        )
        self.set_individual_colors = ToggleSwitch(
            name="setIndividualColors",
            display_name="Set Individual Colors",
            display_name_key="Visual_SetIndividualColors",
            value=False,
        )
        self.slices = self.base_slices()

    def base_slices(self) -> List[Slice]:
        return [self.match_node_colors, self.match_source_or_destination, self.set_individual_colors]

    @property
    def mode(self) -> LinkColorMode:
        if self.match_node_colors.value:
            return LinkColorMode.MATCH_NODE_COLORS
        if self.set_individual_colors.value:
            return LinkColorMode.INDIVIDUAL_COLORS
        return LinkColorMode.UNIFORM

    @property
    def match_target(self) -> LinkMatchTarget:
        return LinkMatchTarget.parse(self.match_source_or_destination.value.value)

    def set_mode(self, mode: LinkColorMode, match_target: Optional[LinkMatchTarget] = None) -> None:
        mode = LinkColorMode(mode)
        if match_target is not None and mode is not LinkColorMode.MATCH_NODE_COLORS:
            raise LinkColorModeError(f"Match target {match_target!r} given for {mode.value} mode")
        self.match_node_colors.set_value(mode is LinkColorMode.MATCH_NODE_COLORS)
        if mode is not LinkColorMode.MATCH_NODE_COLORS:
            self.set_individual_colors.set_value(mode is LinkColorMode.INDIVIDUAL_COLORS)
        if match_target is not None:
            self.match_source_or_destination.set_value(LinkMatchTarget.parse(match_target).value)


class LinkOutlineSettings(SimpleCard):
    def __init__(self) -> None:
        super().__init__()
        self.name = "linkOutline"
        self.display_name = "Outline"
        self.display_name_key = "Visual_LinkOutline"
        self.draw = ToggleSwitch(name="showLinkOutine", display_name_key="Visual_ShowLinkOutline", value=True)
        self.top_level_slice = self.draw


class LinksSettings(CompositeCard):
    def __init__(self) -> None:
        super().__init__()
        self.name = "links"
        self.display_name = "Links"
        self.display_name_key = "Visual_Links"
        self.colors = LinkColorSettings()
        self.outline = LinkOutlineSettings()
        self.groups = [self.colors, self.outline]


class NodesSettings(SimpleCard):
    """Node width and colors. Per-node color overrides are appended here."""

    def __init__(self) -> None:
        super().__init__()
        self.name = "nodes"
        self.display_name = "Nodes"
        self.display_name_key = "Visual_Nodes"
        self.node_width = NumUpDown(
            name="nodesWidth",
            display_name="Width",
            display_name_key="Visual_Width",
            value=NodeWidthDefaultOptions.DEFAULT_WIDTH,
            min_value=NodeWidthDefaultOptions.MIN_WIDTH,
            max_value=NodeWidthDefaultOptions.MAX_WIDTH,
        )
        self.default_color = ColorPicker(
            name="defaultColor",
            display_name="Default color",
            display_name_key="Visual_NodeDefaultColor",
        )
        self.show_all = ToggleSwitch(
            name="showAll",
            display_name="Show all",
            display_name_key="Visual_NodesShowAll",
            value=False,
        )
        self.slices = [self.node_width, self.default_color, self.show_all]


class ScaleSettings(SimpleCard):
    def __init__(self) -> None:
        super().__init__()
        self.name = "scaleSettings"
        self.display_name = "Scale settings"
        self.display_name_key = "Visual_ScaleSettings"
        self.provide_min_height = ToggleSwitch(
            name="provideMinHeight",
            display_name="Provide min optimal height of node",
            display_name_key="Visual_MinOptimalHeight",
            value=True,
        )
        self.ln_scale = ToggleSwitch(
            name="lnScale",
            display_name="Enable logarithmic scale",
            display_name_key="Visual_LogarithmicScale",
            value=False,
        )
        self.slices = [self.provide_min_height, self.ln_scale]


class PersistPropertiesSettings(SimpleCard):
    """Host-managed storage for layout state; its slices are never shown."""

    def __init__(self) -> None:
        super().__init__()
        self.name = "persistProperties"
        self.display_name_key = "Visual_NodePositions"
        self.collapsible = False
        self.node_positions = ReadOnlyText(
            name="nodePositions",
            display_name_key="Visual_NodePositions",
            value="",
            visible=False,
        )
        self.viewport_size = ReadOnlyText(
            name="viewportSize",
            display_name_key="Visual_ViewportSize",
            value="",
            visible=False,
        )
        self.slices = [self.node_positions, self.viewport_size]


class ButtonSettings(SimpleCard):
    def __init__(self) -> None:
        super().__init__()
        self.name = "button"
        self.display_name_key = "Visual_ResetButton"
        self.description_key = "Visual_ResetButonDescription"
        self.show = ToggleSwitch(name="showResetButon", display_name_key="Visual_ShowResetButton", value=False)
        self.position = ItemDropdown(
            name="position",
            display_name_key="Visual_Position",
            items=BUTTON_POSITION_OPTIONS,
            value=BUTTON_POSITION_OPTIONS[5],
        )
        self.top_level_slice = self.show
        self.slices = [self.position]


class NodeComplexSettings(CompositeCard):
    def __init__(self) -> None:
        super().__init__()
        self.name = "nodeComplexSettings"
        self.display_name_key = "Visual_Sorting"
        self.persist_properties = PersistPropertiesSettings()
        self.button = ButtonSettings()
        self.groups = [self.persist_properties, self.button]


class CyclesLinkSettings(SimpleCard):
    def __init__(self) -> None:
        super().__init__()
        self.name = "cyclesLinks"
        self.display_name = "Cycles displaying"
        self.display_name_key = "Visual_Cycles"
        self.draw_cycles = ItemDropdown(
            name="drawCycles",
            display_name="Duplicate nodes",
            display_name_key="Visual_DuplicateNodes",
            items=DUPLICATE_NODES_OPTIONS,
            value=DUPLICATE_NODES_OPTIONS[0],
        )
        self.self_links_weight = ToggleSwitch(
            name="selfLinksWeight",
            display_name="Ignore weight of self links",
            display_name_key="Visual_SelflinkWeight",
            value=False,
        )
        self.slices = [self.draw_cycles, self.self_links_weight]

    @property
    def draw_type(self) -> CyclesDrawType:
        return CyclesDrawType(self.draw_cycles.value.value)


class SankeyDiagramSettings:
    """Root of the formatting tree exchanged with the host."""

    def __init__(self) -> None:
        self.scale_factors = ScaleFactors()
        self.sort = ""

        self.labels = DataLabelsSettings()
        self.link_labels = LinkLabelsSettings()
        self.links = LinksSettings()
        self.nodes = NodesSettings()
        self.scale = ScaleSettings()
        self.cycles_links = CyclesLinkSettings()
        self.node_complex_settings = NodeComplexSettings()
        self.cards: List[Card] = [
            self.labels,
            self.link_labels,
            self.links,
            self.nodes,
            self.scale,
            self.cycles_links,
            self.node_complex_settings,
        ]

        self.node_positions: List[NodePosition] = []
        self.viewport_size = ViewportSize()

    @property
    def link_colors(self) -> LinkColorSettings:
        return self.links.colors

    @property
    def persist_properties(self) -> PersistPropertiesSettings:
        return self.node_complex_settings.persist_properties

    def refresh(self, nodes: Sequence[SankeyNode], links: Sequence[SankeyLink]) -> None:
        """Bring the dynamic cards in line with the current data."""
        populate_node_color_overrides(self.nodes, nodes, bool(self.nodes.show_all.value))
        resolve_link_colors(self.link_colors, links)
        self.load_persisted()

    def load_persisted(self) -> None:
        self.node_positions = decode_node_positions(self.persist_properties.node_positions.value)
        self.viewport_size = decode_viewport_size(self.persist_properties.viewport_size.value)

    def persist_node_positions(self, positions: Sequence[NodePosition]) -> str:
        text = encode_node_positions(positions)
        self.persist_properties.node_positions.set_value(text)
        self.node_positions = list(positions)
        return text

    def persist_viewport_size(self, size: ViewportSize) -> str:
        text = encode_viewport_size(size)
        self.persist_properties.viewport_size.set_value(text)
        self.viewport_size = size
        return text

    def iter_cards(self) -> Iterator[Card]:
        """Yield every card, including cards nested in composite cards."""
        for card in self.cards:
            yield card
            if isinstance(card, CompositeCard):
                for group in card.groups:
                    if isinstance(group, Card):
                        yield group

    def find_card(self, name: str) -> Optional[Card]:
        return next((card for card in self.iter_cards() if card.name == name), None)

    def find_slice(self, card_name: str, slice_name: str) -> Optional[Slice]:
        card = self.find_card(card_name)
        if card is None:
            return None
        candidates: List[Slice] = []
        if card.top_level_slice is not None:
            candidates.append(card.top_level_slice)
        for slice_ in card.iter_slices():
            if slice_.is_dynamic:
                continue
            candidates.append(slice_)
            candidates.extend(getattr(slice_, "parts", []))
        return next((s for s in candidates if s.name == slice_name), None)

    def to_formatting_model(self, localize: Optional[Localizer] = None) -> FormattingModel:
        return export_formatting_model(self.cards, localize)
