"""Pydantic schemas for the formatting model handed to the host pane."""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class _HostModel(BaseModel):
    model_config = {"populate_by_name": True, "alias_generator": to_camel}


class SelectorSchema(_HostModel):
    key: Optional[str] = None
    wildcard: Optional[str] = None


class ItemSchema(_HostModel):
    value: Any
    display_name: Optional[str] = None
    display_name_key: Optional[str] = None


class NumericOptions(_HostModel):
    min_value: Optional[float] = None
    max_value: Optional[float] = None


class SliceSchema(_HostModel):
    kind: str
    name: str
    display_name: Optional[str] = None
    display_name_key: Optional[str] = None
    description: Optional[str] = None
    visible: bool = True
    value: Any = None
    selector: Optional[SelectorSchema] = None
    options: Optional[NumericOptions] = None
    items: Optional[List[ItemSchema]] = None
    instance_kind: Optional[str] = None
    slices: Optional[List["SliceSchema"]] = None


class GroupSchema(_HostModel):
    name: str
    display_name: Optional[str] = None
    visible: bool = True
    collapsible: bool = True
    top_level_slice: Optional[SliceSchema] = None
    slices: List[SliceSchema] = Field(default_factory=list)


class CardSchema(_HostModel):
    name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    visible: bool = True
    collapsible: bool = True
    top_level_slice: Optional[SliceSchema] = None
    slices: Optional[List[SliceSchema]] = None
    groups: Optional[List[GroupSchema]] = None


class FormattingModel(_HostModel):
    cards: List[CardSchema] = Field(default_factory=list)

    def find_card(self, name: str) -> Optional[CardSchema]:
        return next((card for card in self.cards if card.name == name), None)
