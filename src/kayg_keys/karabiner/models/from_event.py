from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .key_code import KeyCode
from .modifiers import FromModifiers
from .to_event import ToEvent


class SimultaneousKey(BaseModel):
    key_code: KeyCode


class SimultaneousOptions(BaseModel):
    """
    https://karabiner-elements.pqrs.org/docs/json/complex-modifications-manipulator-definition/from/simultaneous-options/
    """

    detect_key_down_uninterruptedly: Optional[bool] = None
    key_down_order: Optional[str] = None
    key_up_order: Optional[str] = None
    key_up_when: Optional[str] = None
    to_after_key_up: Optional[List[ToEvent]] = None


class FromEvent(BaseModel):
    """Karabiner `from` event model (key_code or simultaneous)."""

    key_code: Optional[KeyCode] = None
    simultaneous: Optional[List[SimultaneousKey]] = None
    simultaneous_options: Optional[SimultaneousOptions] = None
    modifiers: Optional[FromModifiers] = None
