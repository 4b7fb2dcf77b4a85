from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from .manipulator import Manipulator

# Engine defaults; profile parameters are layered on top.
DEFAULT_PARAMETERS: Dict[str, int] = {
    "basic.simultaneous_threshold_milliseconds": 50,
    "basic.to_delayed_action_delay_milliseconds": 500,
    "basic.to_if_alone_timeout_milliseconds": 1000,
    "basic.to_if_held_down_threshold_milliseconds": 500,
    "mouse_motion_to_scroll.speed": 100,
}


class Rule(BaseModel):
    """One entry of `complex_modifications.rules`: a described group of manipulators."""

    description: str
    manipulators: List[Manipulator]


class ComplexModifications(BaseModel):
    """The `complex_modifications` object of one karabiner.json profile."""

    parameters: Dict[str, int | bool] = Field(default_factory=lambda: dict(DEFAULT_PARAMETERS))
    rules: List[Rule] = Field(default_factory=list)
