from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict
import tomllib

from .config import Config, LayerConfig, MapConfig
from .dsl import app, parse_trigger, remap, shell
from .ir import LayerIR, ManipulatorIR, ProfileIR

logger = logging.getLogger(__name__)


class LayerFrontend:
    """Parse a profile config (TOML) into layer IR."""

    def load_toml(self, path: str | Path) -> Dict[str, Any]:
        """Load a TOML config file into a dict."""

        path = Path(path)
        return tomllib.loads(path.read_text(encoding="utf-8"))

    def parse_config(self, config: Dict[str, Any]) -> ProfileIR:
        cfg = Config.model_validate(config)

        layers = [self._parse_layer(layer) for layer in cfg.layer]
        logger.debug("parsed %d layers for profile %r", len(layers), cfg.name)
        return ProfileIR(name=cfg.name, layers=layers, parameters=dict(cfg.parameters))

    def _parse_layer(self, layer: LayerConfig) -> LayerIR:
        manipulators = [_parse_map(m, optional_any=layer.optional_any) for m in layer.map]

        # Layers without a trigger are bare rules
        trigger = None
        if layer.trigger is not None:
            trigger = parse_trigger(layer.trigger, mode=layer.mode, threshold_ms=layer.threshold_ms)

        return LayerIR(
            description=layer.description,
            trigger=trigger,
            variable=layer.variable,
            notification=layer.notification,
            manipulators=manipulators,
        )


def _parse_map(entry: MapConfig, *, optional_any: bool) -> ManipulatorIR:
    if entry.app is not None:
        action = app(entry.app)
    elif entry.shell is not None:
        action = shell(entry.shell)
    else:
        action = entry.to
    return remap(entry.from_, action, alone=entry.alone, optional_any=optional_any)
