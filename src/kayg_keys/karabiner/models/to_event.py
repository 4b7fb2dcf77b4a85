from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .key_code import KeyCode
from .modifiers import Modifier


class Variable(BaseModel):
    name: str
    value: str | int | bool


class NotificationMessage(BaseModel):
    """Empty `text` hides the message with the same `id`."""

    id: str
    text: str


class ToEvent(BaseModel):
    """
    Karabiner `to` event model.

    https://karabiner-elements.pqrs.org/docs/json/complex-modifications-manipulator-definition/to/
    """

    key_code: Optional[KeyCode] = None
    consumer_key_code: Optional[KeyCode] = None
    shell_command: Optional[str] = None
    set_variable: Optional[Variable] = None
    set_notification_message: Optional[NotificationMessage] = None
    modifiers: Optional[List[Modifier]] = None
