from __future__ import annotations

from .dsl import (
    app,
    duo_layer,
    emit,
    hyper_layer,
    layer,
    parse_keychord,
    parse_trigger,
    remap,
    rule,
    shell,
    simlayer,
    to_hyper,
    to_meh,
    with_optional_any,
)
from .frontend import LayerFrontend
from .ir import (
    HYPER,
    MEH,
    Action,
    Emit,
    HoldTrigger,
    KeyChord,
    KeyCode,
    LaunchApp,
    LayerIR,
    ManipulatorIR,
    Modifier,
    ModifierTrigger,
    ProfileIR,
    RunShell,
    SimultaneousTrigger,
    Trigger,
)
from .lint import LintIssue, lint_layer, lint_profile

__all__ = [
    "HYPER",
    "MEH",
    "Action",
    "Emit",
    "HoldTrigger",
    "KeyChord",
    "KeyCode",
    "LaunchApp",
    "LayerFrontend",
    "LayerIR",
    "LintIssue",
    "ManipulatorIR",
    "Modifier",
    "ModifierTrigger",
    "ProfileIR",
    "RunShell",
    "SimultaneousTrigger",
    "Trigger",
    "app",
    "duo_layer",
    "emit",
    "hyper_layer",
    "layer",
    "lint_layer",
    "lint_profile",
    "parse_keychord",
    "parse_trigger",
    "remap",
    "rule",
    "shell",
    "simlayer",
    "to_hyper",
    "to_meh",
    "with_optional_any",
]
