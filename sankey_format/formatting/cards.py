"""Cards and groups of the formatting pane."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from sankey_format.formatting.slices import (
    ColorPicker,
    FontControl,
    FontPicker,
    NumUpDown,
    Slice,
    ToggleSwitch,
)
from sankey_format.utils.config import settings

DEFAULT_FONT_SIZE = 12
MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 60
DEFAULT_FONT_FILL = "#000000"


class Group:
    """Named, ordered run of slices inside a composite card."""

    def __init__(
        self,
        name: str,
        display_name_key: Optional[str] = None,
        slices: Optional[Sequence[Slice]] = None,
        display_name: Optional[str] = None,
        visible: bool = True,
    ) -> None:
        self.name = name
        self.display_name = display_name
        self.display_name_key = display_name_key
        self.slices: List[Slice] = list(slices or [])
        self.visible = visible


class Card:
    """Common card state. ``top_level_slice`` is the enabling toggle, if any."""

    name: str = ""
    display_name: Optional[str] = None
    display_name_key: Optional[str] = None
    description_key: Optional[str] = None
    collapsible: bool = True
    visible: bool = True
    top_level_slice: Optional[ToggleSwitch] = None

    @property
    def enabled(self) -> bool:
        return self.top_level_slice is None or bool(self.top_level_slice.value)

    def iter_slices(self) -> Iterator[Slice]:
        raise NotImplementedError


class SimpleCard(Card):
    def __init__(self) -> None:
        self.slices: List[Slice] = []

    def iter_slices(self) -> Iterator[Slice]:
        yield from self.slices

    def dynamic_slices(self) -> List[Slice]:
        return [s for s in self.slices if s.is_dynamic]


class CompositeCard(Card):
    def __init__(self) -> None:
        self.groups: List[Union[Group, SimpleCard]] = []

    def iter_slices(self) -> Iterator[Slice]:
        for group in self.groups:
            if isinstance(group, Group):
                yield from group.slices


class FontGroup:
    """Font family, size, style toggles and fill, shared by every text card.

    Owning cards hold one instance and expose ``group`` among their groups.
    """

    def __init__(self, card_name: str, default_font_size: float = DEFAULT_FONT_SIZE) -> None:
        self.font_family = FontPicker(name="fontFamily", value=settings.default_font_family)
        self.font_size = NumUpDown(
            name="fontSize",
            display_name="Text Size",
            display_name_key="Visual_TextSize",
            value=default_font_size,
            min_value=MIN_FONT_SIZE,
            max_value=MAX_FONT_SIZE,
        )
        self.bold = ToggleSwitch(name="fontBold", value=False)
        self.italic = ToggleSwitch(name="fontItalic", value=False)
        self.underline = ToggleSwitch(name="fontUnderline", value=False)
        self.fill = ColorPicker(name="fill", display_name_key="Visual_Color", value=DEFAULT_FONT_FILL)
        self.font_control = FontControl(
            name="font",
            display_name="Font",
            display_name_key="Visual_Font",
            font_family=self.font_family,
            font_size=self.font_size,
            bold=self.bold,
            italic=self.italic,
            underline=self.underline,
        )
        self.group = Group(
            name=f"{card_name}Values",
            display_name_key="Visual_Values",
            slices=[self.font_control, self.fill],
        )

    def add(self, *slices: Slice) -> None:
        self.group.slices.extend(slices)

    def css(self) -> Dict[str, Any]:
        """Text style consumed by the renderer."""
        return {
            "font-family": self.font_family.value,
            "font-size": self.font_size.value,
            "font-weight": "bold" if self.bold.value else "normal",
            "font-style": "italic" if self.italic.value else "normal",
            "text-decoration": "underline" if self.underline.value else "none",
            "fill": self.fill.value,
        }
