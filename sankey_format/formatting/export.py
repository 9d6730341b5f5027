"""Build the host-facing formatting model from live cards."""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

from sankey_format.formatting.cards import Card, CompositeCard, Group, SimpleCard
from sankey_format.formatting.slices import Slice
from sankey_format.schemas import CardSchema, FormattingModel, GroupSchema, SliceSchema

Localizer = Callable[[str], str]


def _display_name(display_name: Optional[str], key: Optional[str], localize: Optional[Localizer]) -> Optional[str]:
    if key and localize is not None:
        return localize(key)
    return display_name or key


def _slice_schema(slice_: Slice, localize: Optional[Localizer], enabled: bool = True) -> SliceSchema:
    data: Dict[str, Any] = slice_.to_dict()
    data["display_name"] = _display_name(slice_.display_name, slice_.display_name_key, localize)
    data["description"] = _display_name(slice_.description, slice_.description_key, localize)
    data["visible"] = bool(slice_.visible and enabled)
    if data.get("items"):
        data["items"] = [
            {**item, "display_name": _display_name(item["display_name"], item["display_name_key"], localize)}
            for item in data["items"]
        ]
    parts = getattr(slice_, "parts", None)
    if parts:
        data["slices"] = [_slice_schema(part, localize, enabled) for part in parts]
    return SliceSchema.model_validate(data)


def _group_schema(group: Group | SimpleCard, localize: Optional[Localizer], enabled: bool) -> GroupSchema:
    if isinstance(group, SimpleCard):
        inner_enabled = enabled and group.enabled
        return GroupSchema(
            name=group.name,
            display_name=_display_name(group.display_name, group.display_name_key, localize),
            visible=group.visible,
            collapsible=group.collapsible,
            top_level_slice=_slice_schema(group.top_level_slice, localize) if group.top_level_slice else None,
            slices=[_slice_schema(s, localize, inner_enabled) for s in group.slices],
        )
    return GroupSchema(
        name=group.name,
        display_name=_display_name(group.display_name, group.display_name_key, localize),
        visible=group.visible,
        slices=[_slice_schema(s, localize, enabled) for s in group.slices],
    )


def card_schema(card: Card, localize: Optional[Localizer] = None) -> CardSchema:
    """Export one card; siblings of a disabled enabling toggle are hidden."""
    schema = CardSchema(
        name=card.name,
        display_name=_display_name(card.display_name, card.display_name_key, localize),
        description=_display_name(None, card.description_key, localize),
        visible=card.visible,
        collapsible=card.collapsible,
        top_level_slice=_slice_schema(card.top_level_slice, localize) if card.top_level_slice else None,
    )
    if isinstance(card, SimpleCard):
        schema.slices = [_slice_schema(s, localize, card.enabled) for s in card.slices]
    elif isinstance(card, CompositeCard):
        schema.groups = [_group_schema(g, localize, card.enabled) for g in card.groups]
    return schema


def export_formatting_model(cards: Sequence[Card], localize: Optional[Localizer] = None) -> FormattingModel:
    return FormattingModel(cards=[card_schema(card, localize) for card in cards])
