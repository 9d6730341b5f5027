"""Formatting pane controls (slices).

Every control carries a stable ``name``, a display key resolved by the host,
its current ``value`` and a ``visible`` flag. Controls generated from data
carry a ``selector`` pointing back at the entity they configure.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

logger = logging.getLogger(__name__)

WILDCARD_INSTANCES_AND_TOTALS = "InstancesAndTotals"


class SettingsContractError(ValueError):
    """Raised when a control is declared with inconsistent options."""


@dataclass(frozen=True)
class Selector:
    """Opaque owner reference used to route an edited value back to its entity."""

    key: Optional[str] = None
    wildcard: Optional[str] = None

    @classmethod
    def data_view_wildcard(cls, matching: str = WILDCARD_INSTANCES_AND_TOTALS) -> "Selector":
        return cls(wildcard=matching)

    @property
    def is_wildcard(self) -> bool:
        return self.wildcard is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "wildcard": self.wildcard}


@dataclass(frozen=True)
class EnumMember:
    value: Any
    display_name: Optional[str] = None
    display_name_key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "display_name": self.display_name,
            "display_name_key": self.display_name_key,
        }


@dataclass(kw_only=True, eq=False)
class Slice:
    """Base control. ``default`` is captured once at construction."""

    kind: ClassVar[str] = "Slice"

    name: str
    display_name: Optional[str] = None
    display_name_key: Optional[str] = None
    description: Optional[str] = None
    description_key: Optional[str] = None
    visible: bool = True
    selector: Optional[Selector] = None
    value: Any = None
    default: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.value = self.coerce(self.value)
        self.default = self.value

    def coerce(self, value: Any) -> Any:
        return value

    def set_value(self, value: Any) -> None:
        self.value = self.coerce(value)

    def reset(self) -> None:
        self.value = self.default

    @property
    def is_dynamic(self) -> bool:
        return self.selector is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "name": self.name,
            "display_name": self.display_name,
            "display_name_key": self.display_name_key,
            "description": self.description,
            "description_key": self.description_key,
            "visible": self.visible,
            "selector": self.selector.to_dict() if self.selector else None,
            "value": self.value,
        }


@dataclass(kw_only=True, eq=False)
class ToggleSwitch(Slice):
    kind: ClassVar[str] = "ToggleSwitch"

    value: bool = False

    def coerce(self, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)


@dataclass(kw_only=True, eq=False)
class NumUpDown(Slice):
    """Bounded number. Values outside ``[min_value, max_value]`` are clamped."""

    kind: ClassVar[str] = "NumUpDown"

    value: float = 0
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    def __post_init__(self) -> None:
        if self.min_value is not None and self.max_value is not None and self.min_value > self.max_value:
            raise SettingsContractError(
                f"{self.name}: min {self.min_value} is greater than max {self.max_value}"
            )
        super().__post_init__()

    def coerce(self, value: Any) -> float:
        try:
            numeric = float(value)
        except (TypeError, ValueError) as exc:
            raise SettingsContractError(f"{self.name}: {value!r} is not a number") from exc
        clamped = numeric
        if self.min_value is not None:
            clamped = max(self.min_value, clamped)
        if self.max_value is not None:
            clamped = min(self.max_value, clamped)
        if clamped != numeric:
            logger.debug("Clamped %s from %s to %s", self.name, numeric, clamped)
        if isinstance(value, int) and not isinstance(value, bool) and float(clamped).is_integer():
            return int(clamped)
        return clamped

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["options"] = {"min_value": self.min_value, "max_value": self.max_value}
        return data


@dataclass(kw_only=True, eq=False)
class ItemDropdown(Slice):
    kind: ClassVar[str] = "ItemDropdown"

    items: List[EnumMember] = field(default_factory=list)
    value: Optional[EnumMember] = None

    def __post_init__(self) -> None:
        if not self.items:
            raise SettingsContractError(f"{self.name}: dropdown declared without items")
        super().__post_init__()

    def coerce(self, value: Any) -> EnumMember:
        if value is None:
            return self.items[0]
        raw = value.value if isinstance(value, EnumMember) else value
        for item in self.items:
            if item.value == raw:
                return item
        raise SettingsContractError(f"{self.name}: {raw!r} is not one of the dropdown items")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["value"] = self.value.value if self.value is not None else None
        data["items"] = [item.to_dict() for item in self.items]
        return data


@dataclass(kw_only=True, eq=False)
class AutoDropdown(Slice):
    """Dropdown whose options are supplied by the host (display units)."""

    kind: ClassVar[str] = "AutoDropdown"


@dataclass(kw_only=True, eq=False)
class ColorPicker(Slice):
    kind: ClassVar[str] = "ColorPicker"

    value: Optional[str] = None
    instance_kind: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["instance_kind"] = self.instance_kind
        return data


@dataclass(kw_only=True, eq=False)
class FontPicker(Slice):
    kind: ClassVar[str] = "FontPicker"

    value: str = ""


@dataclass(kw_only=True, eq=False)
class ReadOnlyText(Slice):
    kind: ClassVar[str] = "ReadOnlyText"

    value: str = ""

    def coerce(self, value: Any) -> str:
        return "" if value is None else str(value)


@dataclass(kw_only=True, eq=False)
class FontControl(Slice):
    """Composite font editor bundling family, size and style toggles."""

    kind: ClassVar[str] = "FontControl"

    font_family: FontPicker
    font_size: NumUpDown
    bold: ToggleSwitch
    italic: ToggleSwitch
    underline: ToggleSwitch

    @property
    def parts(self) -> List[Slice]:
        return [self.font_family, self.font_size, self.bold, self.italic, self.underline]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["slices"] = [part.to_dict() for part in self.parts]
        return data
