"""Host bridge: rebuild the settings model from persisted property objects."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sankey_format.formatting.slices import ColorPicker, SettingsContractError, Slice
from sankey_format.settings import SankeyDiagramSettings

logger = logging.getLogger(__name__)

PersistedObjects = Mapping[str, Mapping[str, Any]]


def _unwrap_fill(value: Any) -> Any:
    # Colors arrive as {"solid": {"color": "#rrggbb"}}.
    if isinstance(value, Mapping):
        solid = value.get("solid")
        if isinstance(solid, Mapping):
            return solid.get("color")
        if "value" in value:
            return value.get("value")
    return value


def _apply_value(slice_: Slice, value: Any) -> bool:
    if isinstance(slice_, ColorPicker):
        value = _unwrap_fill(value)
    try:
        slice_.set_value(value)
    except SettingsContractError as exc:
        logger.warning("Ignoring persisted value for %s: %s", slice_.name, exc)
        return False
    return True


def populate_settings_model(
    objects: Optional[PersistedObjects],
    model: Optional[SankeyDiagramSettings] = None,
) -> SankeyDiagramSettings:
    """Apply ``{card_name: {slice_name: value}}`` onto ``model`` (or a new one)."""
    model = model if model is not None else SankeyDiagramSettings()
    applied = 0
    for card_name, properties in (objects or {}).items():
        if not isinstance(properties, Mapping):
            continue
        for slice_name, value in properties.items():
            slice_ = model.find_slice(card_name, slice_name)
            if slice_ is None:
                logger.debug("Unknown persisted property %s.%s", card_name, slice_name)
                continue
            if _apply_value(slice_, value):
                applied += 1
    model.load_persisted()
    logger.debug("Applied %d persisted properties", applied)
    return model
