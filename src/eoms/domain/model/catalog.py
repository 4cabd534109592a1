"""Item names offered as suggestions while typing an order."""

from __future__ import annotations

ITEM_NAMES: tuple[str, ...] = (
    "Brackets",
    "Pipes",
    "Valves",
    "Fittings",
    "Sheets",
    "Rods",
    "Springs",
    "Gears",
    "Bolts",
    "Nuts",
    "Washers",
    "Plates",
    "Housings",
    "Connectors",
    "Shafts",
    "Bushings",
)


def suggest_item_names(text: str, names: tuple[str, ...] = ITEM_NAMES) -> list[str]:
    """Catalog names containing ``text``, case-insensitively, in catalog order."""
    needle = text.strip().lower()
    if not needle:
        return []
    return [name for name in names if needle in name.lower()]
