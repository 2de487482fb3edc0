"""Entities, their activity priorities and per-frame processing into draw layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Optional, Sequence

ENTITY_COUNT = 0x4A0
TEMPENTITY_START = ENTITY_COUNT - 0x80
OBJECT_COUNT = 0x100
BLANK_OBJECT = 0
DRAW_LAYER_COUNT = 7
SCREEN_YSIZE = 240

RunEntity = Callable[[int, "Entity"], None]


class Priority(IntEnum):
    BOUNDS = 0
    ACTIVE = 1
    ALWAYS = 2
    XBOUNDS = 3
    BOUNDS_DESTROY = 4
    INACTIVE = 5


@dataclass
class Entity:
    x_pos: int = 0
    y_pos: int = 0
    values: list[int] = field(default_factory=lambda: [0] * 8)
    scale: int = 0
    rotation: int = 0
    animation_timer: int = 0
    animation_speed: int = 0
    type: int = BLANK_OBJECT
    property_value: int = 0
    state: int = 0
    priority: int = Priority.BOUNDS
    draw_order: int = 0
    direction: int = 0
    ink_effect: int = 0
    alpha: int = 0
    animation: int = 0
    prev_animation: int = 0
    frame: int = 0


@dataclass
class ObjectBorders:
    """Distances from the camera within which bounded entities stay active."""

    x1: int = 0x80
    x2: int = 0
    y1: int = 0x100
    y2: int = SCREEN_YSIZE + 0x100


def normalize_type_name(name: str) -> str:
    """Object type names are stored with their spaces removed."""
    return name.replace(" ", "")


def _in_x(x: int, x_scroll: int, borders: ObjectBorders) -> bool:
    return x_scroll - borders.x1 < x < borders.x2 + x_scroll


def _in_y(y: int, y_scroll: int, borders: ObjectBorders) -> bool:
    return y_scroll - borders.y1 < y < y_scroll + borders.y2


def entity_active(entity: Entity, x_scroll: int, y_scroll: int,
                  borders: Optional[ObjectBorders] = None) -> bool:
    """Whether the entity runs this frame; out-of-range destroy entities become blank."""
    borders = borders if borders is not None else ObjectBorders()
    x = entity.x_pos >> 16
    y = entity.y_pos >> 16
    priority = entity.priority
    if priority == Priority.BOUNDS:
        return _in_x(x, x_scroll, borders) and _in_y(y, y_scroll, borders)
    if priority in (Priority.ACTIVE, Priority.ALWAYS):
        return True
    if priority == Priority.XBOUNDS:
        return _in_x(x, x_scroll, borders)
    if priority == Priority.BOUNDS_DESTROY:
        if _in_x(x, x_scroll, borders) and _in_y(y, y_scroll, borders):
            return True
        entity.type = BLANK_OBJECT
        return False
    return False


def _run_and_draw(index: int, entity: Entity, run_entity: Optional[RunEntity],
                  layers: list[list[int]]) -> None:
    if run_entity is not None:
        run_entity(index, entity)
    if 0 <= entity.draw_order < DRAW_LAYER_COUNT:
        layers[entity.draw_order].append(index)


def process_objects(entities: Sequence[Entity], x_scroll: int, y_scroll: int,
                    borders: Optional[ObjectBorders] = None,
                    run_entity: Optional[RunEntity] = None) -> list[list[int]]:
    """Run every active, non-blank entity and return entity indices per draw layer."""
    layers: list[list[int]] = [[] for _ in range(DRAW_LAYER_COUNT)]
    for index, entity in enumerate(entities):
        if entity_active(entity, x_scroll, y_scroll, borders) and entity.type > BLANK_OBJECT:
            _run_and_draw(index, entity, run_entity, layers)
    return layers


def process_paused_objects(entities: Sequence[Entity],
                           run_entity: Optional[RunEntity] = None) -> list[list[int]]:
    """Run only entities that are always active, as while the stage is paused."""
    layers: list[list[int]] = [[] for _ in range(DRAW_LAYER_COUNT)]
    for index, entity in enumerate(entities):
        if entity.priority == Priority.ALWAYS and entity.type > BLANK_OBJECT:
            _run_and_draw(index, entity, run_entity, layers)
    return layers