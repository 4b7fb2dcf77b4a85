from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class MapConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str | None = None
    app: str | None = None
    shell: str | None = None
    alone: str | None = None

    @model_validator(mode="after")
    def _one_action(self) -> MapConfig:
        given = [name for name in ("to", "app", "shell") if getattr(self, name) is not None]
        if len(given) != 1:
            raise ValueError(f"map {self.from_!r} needs exactly one of to/app/shell, got {given}")
        return self


class LayerConfig(BaseModel):
    description: str | None = None
    trigger: str | None = None
    mode: Literal["modifier", "layer", "simlayer", "duo"] | None = None
    threshold_ms: int | None = None
    variable: str | None = None
    notification: bool = False
    optional_any: bool = False
    map: List[MapConfig] = Field(default_factory=list)


def _flatten(table: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for name, value in table.items():
        key = f"{prefix}{name}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{key}."))
        else:
            flat[key] = value
    return flat


class Config(BaseModel):
    version: int | None = None
    name: str
    parameters: Dict[str, int | bool] = Field(default_factory=dict)
    layer: List[LayerConfig] = Field(default_factory=list)

    @field_validator("parameters", mode="before")
    @classmethod
    def _dotted_parameters(cls, value: Any) -> Any:
        # Unquoted dotted keys (duo_layer.threshold_milliseconds = 100) arrive as nested tables.
        if isinstance(value, dict):
            return _flatten(value)
        return value
