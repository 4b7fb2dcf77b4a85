from __future__ import annotations

import logging
import shlex
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from kayg_keys.layers.ir import (
    Action,
    Emit,
    HoldTrigger,
    KeyChord,
    LaunchApp,
    LayerIR,
    ManipulatorIR,
    ModifierTrigger,
    ProfileIR,
    RunShell,
    SimultaneousTrigger,
)

from .models.complex_modifications import DEFAULT_PARAMETERS, ComplexModifications, Rule
from .models.condition import ConditionType, VarCondition
from .models.from_event import FromEvent, SimultaneousKey, SimultaneousOptions
from .models.key_code import CONSUMER_KEY_CODES
from .models.manipulator import Manipulator
from .models.modifiers import FromModifiers, Modifier
from .models.to_event import NotificationMessage, ToEvent, Variable

logger = logging.getLogger(__name__)

# Parameters read by the compiler itself; never written to karabiner.json.
COMPILER_PARAMETER_PREFIXES = ("simlayer.", "duo_layer.")
DEFAULT_THRESHOLD_MS = 200

_SIMULTANEOUS_THRESHOLD = "basic.simultaneous_threshold_milliseconds"


class KarabinerBackend:
    """Compile layer IR into Karabiner `complex_modifications` models."""

    def compile(self, profile: ProfileIR) -> ComplexModifications:
        rules = [self.compile_layer(layer, profile.parameters) for layer in profile.layers]
        logger.debug("compiled %d rules for profile %r", len(rules), profile.name)
        return ComplexModifications(
            parameters=engine_parameters(profile.parameters),
            rules=rules,
        )

    def compile_layer(
        self, layer: LayerIR, parameters: Optional[Mapping[str, int | bool]] = None
    ) -> Rule:
        parameters = parameters or {}
        var = layer.state_variable()
        trigger = layer.trigger

        manipulators: List[Manipulator] = []
        if trigger is None:
            manipulators.extend(_lower_manipulator(m) for m in layer.manipulators)
        elif isinstance(trigger, ModifierTrigger):
            manipulators.append(_modifier_toggle(layer, trigger, var))
            for m in layer.manipulators:
                manipulators.append(
                    _lower_manipulator(m, var=var, held=_sorted_modifiers(trigger.modifiers))
                )
        elif isinstance(trigger, HoldTrigger):
            manipulators.append(_hold_toggle(layer, trigger, var))
            manipulators.extend(_lower_manipulator(m, var=var) for m in layer.manipulators)
        elif isinstance(trigger, SimultaneousTrigger) and len(trigger.keys) == 1:
            threshold = _threshold(trigger, parameters, "simlayer.threshold_milliseconds")
            for m in layer.manipulators:
                manipulators.append(_lower_manipulator(m, var=var))
                manipulators.append(_simlayer_entry(layer, trigger, m, var, threshold))
        elif isinstance(trigger, SimultaneousTrigger):
            threshold = _threshold(trigger, parameters, "duo_layer.threshold_milliseconds")
            notify = layer.notification or bool(parameters.get("duo_layer.notification", False))
            manipulators.append(_duo_toggle(layer, trigger, var, threshold, notify))
            manipulators.extend(_lower_manipulator(m, var=var) for m in layer.manipulators)
        else:
            raise ValueError(f"unsupported trigger: {type(trigger).__name__}")

        description = layer.description or (f"Layer - {var}" if var else "Rule")
        logger.debug("layer %r: %d manipulators", description, len(manipulators))
        return Rule(description=description, manipulators=manipulators)


def engine_parameters(parameters: Mapping[str, int | bool]) -> Dict[str, int | bool]:
    """Engine defaults overridden by the profile, minus compiler-only settings."""

    merged: Dict[str, int | bool] = dict(DEFAULT_PARAMETERS)
    for name, value in parameters.items():
        if name.startswith(COMPILER_PARAMETER_PREFIXES):
            continue
        merged[name] = value
    return merged


def _threshold(
    trigger: SimultaneousTrigger, parameters: Mapping[str, int | bool], name: str
) -> int:
    if trigger.threshold_ms is not None:
        return trigger.threshold_ms
    return int(parameters.get(name, DEFAULT_THRESHOLD_MS))


def _lower_manipulator(
    manip: ManipulatorIR,
    *,
    var: Optional[str] = None,
    held: Sequence[Modifier] = (),
) -> Manipulator:
    # Layer modifiers are still down while the layer is in use.
    mandatory = [*held, *(m for m in _sorted_modifiers(manip.mandatory) if m not in held)]
    optional_any = manip.optional_any or bool(held)
    return Manipulator(
        conditions=[_var_if(var, 1)] if var else None,
        from_=FromEvent(
            key_code=manip.key,
            modifiers=_from_modifiers(mandatory, optional_any=optional_any),
        ),
        to=_lower_actions(manip.actions),
        to_if_alone=_lower_actions(manip.alone) if manip.alone else None,
    )


def _modifier_toggle(layer: LayerIR, trigger: ModifierTrigger, var: str) -> Manipulator:
    return Manipulator(
        from_=FromEvent(
            key_code=trigger.key,
            modifiers=FromModifiers(mandatory=_sorted_modifiers(trigger.modifiers)),
        ),
        to=[_set_var(var, 1), *_notify_on(layer, var)],
        to_after_key_up=[_set_var(var, 0), *_notify_off(layer, var)],
    )


def _hold_toggle(layer: LayerIR, trigger: HoldTrigger, var: str) -> Manipulator:
    return Manipulator(
        from_=FromEvent(key_code=trigger.key, modifiers=FromModifiers(optional=[Modifier.ANY])),
        to=[_set_var(var, 1), *_notify_on(layer, var)],
        to_after_key_up=[_set_var(var, 0), *_notify_off(layer, var)],
        to_if_alone=[ToEvent(key_code=trigger.key)],
    )


def _duo_toggle(
    layer: LayerIR, trigger: SimultaneousTrigger, var: str, threshold: int, notify: bool
) -> Manipulator:
    return Manipulator(
        from_=FromEvent(
            simultaneous=[SimultaneousKey(key_code=k) for k in trigger.keys],
            simultaneous_options=SimultaneousOptions(
                to_after_key_up=[_set_var(var, 0), *_notify_off(layer, var, notify)],
            ),
            modifiers=FromModifiers(optional=[Modifier.ANY]),
        ),
        to=[_set_var(var, 1), *_notify_on(layer, var, notify)],
        parameters={_SIMULTANEOUS_THRESHOLD: threshold},
    )


def _simlayer_entry(
    layer: LayerIR,
    trigger: SimultaneousTrigger,
    manip: ManipulatorIR,
    var: str,
    threshold: int,
) -> Manipulator:
    # Layer key pressed together with a mapped key: enter the layer and run the mapping.
    return Manipulator(
        from_=FromEvent(
            simultaneous=[
                SimultaneousKey(key_code=trigger.keys[0]),
                SimultaneousKey(key_code=manip.key),
            ],
            simultaneous_options=SimultaneousOptions(
                detect_key_down_uninterruptedly=True,
                key_down_order="strict",
                key_up_order="strict_inverse",
                key_up_when="any",
                to_after_key_up=[_set_var(var, 0), *_notify_off(layer, var)],
            ),
            modifiers=FromModifiers(optional=[Modifier.ANY]),
        ),
        to=[_set_var(var, 1), *_notify_on(layer, var), *_lower_actions(manip.actions)],
        to_if_alone=_lower_actions(manip.alone) if manip.alone else None,
        parameters={_SIMULTANEOUS_THRESHOLD: threshold},
    )


def _lower_actions(actions: Iterable[Action]) -> List[ToEvent]:
    return [_lower_action(action) for action in actions]


def _lower_action(action: Action) -> ToEvent:
    if isinstance(action, Emit):
        return _key_event(action.chord)
    if isinstance(action, LaunchApp):
        return ToEvent(shell_command=f"open -a {shlex.quote(action.app + '.app')}")
    if isinstance(action, RunShell):
        return ToEvent(shell_command=action.command)
    raise ValueError(f"unsupported action: {type(action).__name__}")


def _key_event(chord: KeyChord) -> ToEvent:
    modifiers = _sorted_modifiers(chord.modifiers) or None
    if chord.key in CONSUMER_KEY_CODES:
        return ToEvent(consumer_key_code=chord.key, modifiers=modifiers)
    return ToEvent(key_code=chord.key, modifiers=modifiers)


def _set_var(name: str, value: str | int) -> ToEvent:
    return ToEvent(set_variable=Variable(name=name, value=value))


def _var_if(name: str, value: str | int) -> VarCondition:
    return VarCondition(type=ConditionType.VARIABLE_IF, name=name, value=value)


def _notify_on(layer: LayerIR, var: str, enabled: Optional[bool] = None) -> List[ToEvent]:
    if not (layer.notification if enabled is None else enabled):
        return []
    text = layer.description or var
    return [ToEvent(set_notification_message=NotificationMessage(id=var, text=text))]


def _notify_off(layer: LayerIR, var: str, enabled: Optional[bool] = None) -> List[ToEvent]:
    if not (layer.notification if enabled is None else enabled):
        return []
    return [ToEvent(set_notification_message=NotificationMessage(id=var, text=""))]


def _from_modifiers(mandatory: List[Modifier], *, optional_any: bool) -> FromModifiers | None:
    if not mandatory and not optional_any:
        return None
    return FromModifiers(
        mandatory=mandatory or None,
        optional=[Modifier.ANY] if optional_any else None,
    )


def _sorted_modifiers(mods) -> list[Modifier]:
    return [Modifier(mod.value) for mod in sorted(mods, key=lambda m: m.value)]
