from __future__ import annotations
import io
import re
from typing import Dict, Iterable, List

import pandas as pd

from .constants import CSV_HEADERS, HEADER_ALIASES, category_label, normalize_name, normalize_pos
from .models import Player
from .roster import Roster

_SPLIT = re.compile(r"[;|]")


def _header_map(cols: Iterable[str]) -> Dict[str, str]:
    """
    Map provided column -> canonical header. Case-insensitive via HEADER_ALIASES;
    unknown columns are left as they are.
    """
    canon = {c.lower(): c for c in CSV_HEADERS}
    out = {}
    for c in cols:
        lc = str(c).strip().lower()
        if lc in canon:
            out[c] = canon[lc]
            continue
        mapped = None
        for k, aliases in HEADER_ALIASES.items():
            if lc in aliases:
                mapped = k
                break
        out[c] = mapped if mapped else c
    return out


def _split(value) -> List[str]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return [t.strip() for t in _SPLIT.split(str(value)) if t.strip()]


def parse_roster_csv(file) -> Roster:
    """
    Parse a roster CSV (bytes or file-like) with Name, Categories, Preferred and
    Status columns. Multi-valued cells use ';' or '|'. Blank names are skipped.
    """
    if isinstance(file, (bytes, bytearray)):
        df = pd.read_csv(io.BytesIO(file), dtype=str)
    else:
        df = pd.read_csv(file, dtype=str)

    df = df.rename(columns=_header_map(df.columns))
    if "Name" not in df.columns:
        raise ValueError("Roster CSV needs a Name column")
    for k in CSV_HEADERS:
        if k not in df.columns:
            df[k] = ""
    df = df[CSV_HEADERS].fillna("")

    players: List[Player] = []
    availability: Dict[str, str] = {}
    for _, r in df.iterrows():
        name = normalize_name(str(r["Name"]))
        if not name:
            continue
        players.append(Player(
            id=name,
            categories=_split(r["Categories"]),
            preferred_positions=[normalize_pos(p) for p in _split(r["Preferred"])],
        ))
        status = str(r["Status"]).strip()
        if status:
            availability[name] = status
    return Roster(players, availability)


def build_template_csv() -> bytes:
    example = (
        "Name,Categories,Preferred,Status\n"
        "Alex Quinn,Striker;Wing,striker;left-wing,available\n"
    )
    return example.encode("utf-8")


def roster_to_dataframe(roster: Roster) -> pd.DataFrame:
    rows = []
    for p in roster.players():
        rows.append({
            "Name": p.id,
            "Categories": category_label(p.categories, sep="; "),
            "Preferred": "; ".join(p.preferred_positions),
            "Status": roster.availability(p.id),
        })
    return pd.DataFrame(rows, columns=CSV_HEADERS)


def roster_csv_bytes(roster: Roster) -> bytes:
    buf = io.StringIO()
    roster_to_dataframe(roster).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")
