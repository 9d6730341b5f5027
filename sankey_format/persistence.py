"""Codec for the persisted node positions and viewport size.

Both values are stored by the host as JSON text inside invisible read-only
slices. Decoding never fails: malformed text yields the default value.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, ValidationError, field_validator

logger = logging.getLogger(__name__)

EMPTY_NODE_POSITIONS = "[]"
EMPTY_VIEWPORT_SIZE = "{}"


class NodePosition(BaseModel):
    model_config = {"populate_by_name": True}

    # Older reports stored the node under "name".
    node_id: str = Field(
        validation_alias=AliasChoices("nodeId", "name", "node_id"),
        serialization_alias="nodeId",
    )
    x: float
    y: float


class ViewportSize(BaseModel):
    width: Optional[str] = None
    height: Optional[str] = None

    @field_validator("width", "height", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


_NODE_POSITIONS = TypeAdapter(List[NodePosition])


def encode_node_positions(positions: Sequence[NodePosition]) -> str:
    return _NODE_POSITIONS.dump_json(list(positions), by_alias=True).decode("utf-8")


def decode_node_positions(text: Optional[str]) -> List[NodePosition]:
    if not text or not text.strip():
        return []
    try:
        return _NODE_POSITIONS.validate_json(text)
    except ValidationError as exc:
        logger.warning("Ignoring malformed node positions: %s", exc.errors(include_url=False)[:1])
        return []


def encode_viewport_size(size: ViewportSize) -> str:
    return size.model_dump_json(exclude_none=True)


def decode_viewport_size(text: Optional[str]) -> ViewportSize:
    if not text or not text.strip():
        return ViewportSize()
    try:
        return ViewportSize.model_validate_json(text)
    except ValidationError as exc:
        logger.warning("Ignoring malformed viewport size: %s", exc.errors(include_url=False)[:1])
        return ViewportSize()
