from __future__ import annotations

from .backend import KarabinerBackend
from .models.complex_modifications import ComplexModifications, Rule
from .models.condition import Condition, ConditionType, VarCondition
from .models.from_event import FromEvent
from .models.key_code import KeyCode
from .models.manipulator import Manipulator
from .models.modifiers import FromModifiers, Modifier
from .models.to_event import ToEvent
from .writer import ProfileNotFoundError, render, write_to_profile

__all__ = [
    "ComplexModifications",
    "Condition",
    "ConditionType",
    "FromEvent",
    "FromModifiers",
    "KarabinerBackend",
    "KeyCode",
    "Manipulator",
    "Modifier",
    "ProfileNotFoundError",
    "Rule",
    "ToEvent",
    "VarCondition",
    "render",
    "write_to_profile",
]
