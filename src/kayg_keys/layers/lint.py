from __future__ import annotations

import logging
from typing import List

from pydantic import BaseModel

from .ir import LayerIR, ProfileIR, Trigger

logger = logging.getLogger(__name__)


class LintIssue(BaseModel):
    layer: str
    message: str

    def __str__(self) -> str:
        return f"{self.layer}: {self.message}"


def _layer_name(layer: LayerIR, index: int) -> str:
    return layer.description or layer.state_variable() or f"layer #{index}"


def lint_layer(layer: LayerIR, *, name: str | None = None) -> List[LintIssue]:
    """Report duplicate source keys and fallbacks identical to their primary actions."""

    name = name or _layer_name(layer, 0)
    issues: List[LintIssue] = []

    seen: set[tuple[str, frozenset]] = set()
    for manip in layer.manipulators:
        source = (manip.key, manip.mandatory)
        if source in seen:
            mods = "+".join(sorted(m.value for m in manip.mandatory))
            label = f"{mods}+{manip.key}" if mods else manip.key
            issues.append(LintIssue(layer=name, message=f"duplicate source key {label!r}"))
        seen.add(source)

        if manip.alone is not None and list(manip.alone) == list(manip.actions):
            issues.append(
                LintIssue(
                    layer=name,
                    message=f"tap-alone fallback of {manip.key!r} is identical to its primary action",
                )
            )

    return issues


def lint_profile(profile: ProfileIR) -> List[LintIssue]:
    """Lint every layer, then look for triggers or state variables shared across layers."""

    issues: List[LintIssue] = []
    triggers: list[tuple[Trigger, str]] = []
    variables: dict[str, str] = {}

    for index, layer in enumerate(profile.layers):
        name = _layer_name(layer, index)
        issues.extend(lint_layer(layer, name=name))

        if layer.trigger is not None:
            shared = [other for trigger, other in triggers if trigger == layer.trigger]
            for other in shared:
                issues.append(LintIssue(layer=name, message=f"shares its trigger with {other!r}"))
            triggers.append((layer.trigger, name))
            if shared:
                continue

        var = layer.state_variable()
        if var is not None:
            if var in variables:
                issues.append(
                    LintIssue(
                        layer=name,
                        message=f"state variable {var!r} already used by {variables[var]!r}",
                    )
                )
            variables[var] = name

    for issue in issues:
        logger.warning("%s", issue)
    return issues
