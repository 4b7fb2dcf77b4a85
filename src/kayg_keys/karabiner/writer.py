from __future__ import annotations

import json
import logging
from pathlib import Path

from .models.complex_modifications import ComplexModifications

logger = logging.getLogger(__name__)

DEFAULT_KARABINER_JSON = Path("~/.config/karabiner/karabiner.json")


class ProfileNotFoundError(LookupError):
    """The named profile does not exist in karabiner.json."""


def render(doc: ComplexModifications, *, indent: int | None = 2) -> str:
    """Serialize a compiled document the way Karabiner stores it."""

    return doc.model_dump_json(indent=indent, by_alias=True, exclude_none=True)


def write_to_profile(
    profile_name: str,
    doc: ComplexModifications,
    karabiner_json: str | Path | None = None,
    *,
    indent: int = 2,
) -> Path:
    """
    Replace the `complex_modifications` of one profile in karabiner.json.

    Everything else in the file (other profiles, devices, simple
    modifications) is written back unchanged. The profile must already exist;
    Karabiner-Elements owns profile creation.
    """

    path = Path(karabiner_json or DEFAULT_KARABINER_JSON).expanduser()
    config = json.loads(path.read_text(encoding="utf-8"))

    profile = next(
        (p for p in config.get("profiles", []) if p.get("name") == profile_name),
        None,
    )
    if profile is None:
        raise ProfileNotFoundError(f"profile {profile_name!r} not found in {path}")

    profile["complex_modifications"] = doc.model_dump(
        mode="json", by_alias=True, exclude_none=True
    )
    # Write beside the original, then swap it in whole.
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(config, indent=indent, ensure_ascii=False) + "\n", encoding="utf-8")
    tmp.replace(path)

    logger.info("wrote %d rules to profile %r in %s", len(doc.rules), profile_name, path)
    return path
