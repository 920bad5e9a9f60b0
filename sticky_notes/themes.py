"""Colour themes and font settings for displaying notes."""

from __future__ import annotations

from pydantic import BaseModel


class ThemeColors(BaseModel):
    """Colours of a single theme, as ``#RRGGBB`` strings."""

    name: str
    background: str
    note_background: str
    action: str
    highlight: str
    text: str
    description: str


THEMES: dict[str, ThemeColors] = {
    t.name: t
    for t in [
        ThemeColors(
            name="Serenity",
            background="#F5F6FA",
            note_background="#FFFFFF",
            action="#6C63FF",
            highlight="#FAE39A",
            text="#232323",
            description="A calming, modern theme for daily focus and clarity.",
        ),
        ThemeColors(
            name="Midnight Focus",
            background="#23272F",
            note_background="#323642",
            action="#FFA500",
            highlight="#91C6E7",
            text="#F8F8FF",
            description="For low-light environments, reducing eye strain at night.",
        ),
        ThemeColors(
            name="Sandstone",
            background="#FFFCF7",
            note_background="#FFF7E6",
            action="#DBA15B",
            highlight="#D3E1DF",
            text="#463F3A",
            description="A warm, natural palette for a classic paper-like experience.",
        ),
        ThemeColors(
            name="Minimal Black & White",
            background="#FFFFFF",
            note_background="#F5F5F5",
            action="#222222",
            highlight="#00B2FF",
            text="#232323",
            description="Minimalist black and white for maximum readability.",
        ),
        ThemeColors(
            name="Cotton",
            background="#FFFAFB",
            note_background="#F3F6FF",
            action="#69B1FF",
            highlight="#E6B0FF",
            text="#262A32",
            description="A soft pastel look for a gentle, creative workspace.",
        ),
    ]
}

DEFAULT_THEME = "Serenity"

# Font size label -> point size
FONT_SIZES: dict[str, float] = {
    "Extra Small": 12.0,
    "Small": 14.0,
    "Medium": 16.0,
    "Large": 18.0,
    "Extra Large": 22.0,
}
DEFAULT_FONT_SIZE = "Medium"

# Font style label -> CSS font-family
FONT_STYLES: dict[str, str] = {
    "Sans-serif": "sans-serif",
    "Serif": "serif",
    "Monospace": "monospace",
    "Cursive": "cursive",
}
DEFAULT_FONT_STYLE = "Sans-serif"

VIEW_MODES = ("Grid", "List")


def resolve_theme(name: str | None) -> ThemeColors:
    """Theme by name, falling back to the first theme for unknown names."""
    return THEMES.get(name or "", next(iter(THEMES.values())))


def font_size_points(label: str | None) -> float:
    """Point size for a font size label; unknown labels use the medium size."""
    return FONT_SIZES.get(label or "", FONT_SIZES[DEFAULT_FONT_SIZE])


def font_family(label: str | None) -> str:
    """CSS font-family for a font style label; unknown labels use the browser default."""
    return FONT_STYLES.get(label or "", "inherit")
