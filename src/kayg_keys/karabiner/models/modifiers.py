from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class Modifier(str, Enum):
    """Karabiner modifier token as it appears in `from` and `to` events."""

    ANY = "any"

    COMMAND = "command"
    CONTROL = "control"
    OPTION = "option"
    SHIFT = "shift"
    FN = "fn"
    CAPS_LOCK = "caps_lock"

    LEFT_COMMAND = "left_command"
    LEFT_CONTROL = "left_control"
    LEFT_OPTION = "left_option"
    LEFT_SHIFT = "left_shift"

    RIGHT_COMMAND = "right_command"
    RIGHT_CONTROL = "right_control"
    RIGHT_OPTION = "right_option"
    RIGHT_SHIFT = "right_shift"


class FromModifiers(BaseModel):
    """Karabiner `from.modifiers` model."""

    mandatory: Optional[List[Modifier]] = None
    optional: Optional[List[Modifier]] = None
