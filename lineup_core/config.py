from __future__ import annotations
import textwrap
from typing import Dict, Optional

import yaml

from .constants import GOALKEEPER, Category, normalize_pos, parse_categories
from .models import Settings

# ===== Game defaults =====
DEFAULT_CONFIG = {
    "total_periods": 8,
    "period_length": 7.5,     # minutes
    "sitting_quota": 3,       # players off the field each period
    "min_sits": 1,
    "max_sits": 2,
    "goalkeeper_count": 3,
}

DEFAULT_FORMATION = "9v9-3-2-3"

# ===== Formations: slot -> categories that may fill it =====
DEFAULT_FORMATIONS_YAML = textwrap.dedent("""\
4v4-1-2-1:
  goalkeeper: Goalkeeper
  defender: [Back, Defense]
  midfielder-left: Midfield
  midfielder-right: Midfield

7v7-2-3-1:
  goalkeeper: Goalkeeper
  defender-left: [Back, Defense]
  defender-right: [Back, Defense]
  midfielder-left: [Midfield, Wing]
  midfielder-center: Midfield
  midfielder-right: [Midfield, Wing]
  forward: Striker

9v9-3-2-3:
  striker: Striker
  left-wing: Wing
  right-wing: Wing
  center-mid-left: Midfield
  center-mid-right: Midfield
  left-back: [Back, Defense]
  center-back: [Back, Defense]
  right-back: [Back, Defense]
  goalkeeper: Goalkeeper

11v11-4-4-2:
  goalkeeper: Goalkeeper
  defender-left: [Back, Defense]
  defender-center-left: [Back, Defense]
  defender-center-right: [Back, Defense]
  defender-right: [Back, Defense]
  midfielder-left: [Midfield, Wing]
  midfielder-center-left: Midfield
  midfielder-center-right: Midfield
  midfielder-right: [Midfield, Wing]
  forward-left: Striker
  forward-right: Striker
""")


def parse_formations(obj) -> Dict[str, Dict[str, Category]]:
    if not isinstance(obj, dict):
        raise ValueError("Formations file must map formation names to slot definitions.")
    out: Dict[str, Dict[str, Category]] = {}
    for name, slots in obj.items():
        if not isinstance(slots, dict) or not slots:
            raise ValueError(f"Formation {name} must be a mapping of slot -> categories.")
        parsed: Dict[str, Category] = {}
        for slot, cats in slots.items():
            parsed[normalize_pos(str(slot))] = parse_categories(cats)
        if GOALKEEPER not in parsed:
            raise ValueError(f"Formation {name} has no {GOALKEEPER} slot.")
        out[str(name)] = parsed
    return out


def formations_from_text(text: str) -> Dict[str, Dict[str, Category]]:
    return parse_formations(yaml.safe_load(text) or {})


def load_formations_yaml(path: str) -> Dict[str, Dict[str, Category]]:
    with open(path, "r", encoding="utf-8") as f:
        return formations_from_text(f.read())


def save_formations_yaml(path: str, text: str):
    formations_from_text(text)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


DEFAULT_FORMATIONS = formations_from_text(DEFAULT_FORMATIONS_YAML)


def settings_for_formation(
    name: str = DEFAULT_FORMATION,
    formations: Optional[Dict[str, Dict[str, Category]]] = None,
    **overrides,
) -> Settings:
    formations = formations or DEFAULT_FORMATIONS
    if name not in formations:
        raise ValueError(f"Unknown formation {name!r}; choose from {sorted(formations)}")
    values = dict(DEFAULT_CONFIG)
    values.update(overrides)
    values["positions"] = dict(formations[name])
    return Settings(**values)


def load_settings(path: str) -> Settings:
    """
    Settings from a YAML file. Any DEFAULT_CONFIG key may be overridden; an optional
    `formation` key picks a default formation, and `formations_file` points at
    extra formations to choose from.
    """
    with open(path, "r", encoding="utf-8") as f:
        obj = yaml.safe_load(f) or {}
    if not isinstance(obj, dict):
        raise ValueError("Settings file must be a mapping.")

    formations = dict(DEFAULT_FORMATIONS)
    extra = obj.pop("formations_file", None)
    if extra:
        formations.update(load_formations_yaml(extra))
    inline = obj.pop("formations", None)
    if inline:
        formations.update(parse_formations(inline))

    name = obj.pop("formation", DEFAULT_FORMATION)
    return settings_for_formation(name, formations, **obj)
