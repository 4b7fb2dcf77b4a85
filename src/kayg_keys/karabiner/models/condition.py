from __future__ import annotations

from enum import Enum
from typing import Literal, TypeAlias

from pydantic import BaseModel

class ConditionType(str, Enum):
    """Karabiner condition type."""

    VARIABLE_IF = "variable_if"
    VARIABLE_UNLESS = "variable_unless"


class BaseCondition(BaseModel):
    """
    Karabiner condition model.

    https://karabiner-elements.pqrs.org/docs/json/complex-modifications-manipulator-definition/conditions/
    """

    type: ConditionType


class VarCondition(BaseCondition):
    type: Literal[ConditionType.VARIABLE_IF, ConditionType.VARIABLE_UNLESS]
    name: str
    value: str | int | bool


Condition: TypeAlias = VarCondition
