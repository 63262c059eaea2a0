"""Accent palette derivation and application.

A single accent hex drives the whole look: hover and disabled variants are
the same color with fixed alpha suffixes. Only the base accent and the
light/dark flag are ever persisted.
"""

from typing import NamedTuple

from nicegui import ui

from yuvai.models.schemas import Theme

HOVER_ALPHA = "dd"
DISABLED_ALPHA = "88"


class Palette(NamedTuple):
    base: str
    hover: str
    disabled: str
    ring: str


def derive_palette(accent_color: str) -> Palette:
    """Derive the palette for an accent color like ``#F59E0B``."""
    rgb = accent_color[:7]
    return Palette(
        base=accent_color,
        hover=rgb + HOVER_ALPHA,
        disabled=rgb + DISABLED_ALPHA,
        ring=accent_color,
    )


def css_variables(palette: Palette) -> dict[str, str]:
    return {
        "--accent-color": palette.base,
        "--accent-color-hover": palette.hover,
        "--accent-color-disabled": palette.disabled,
        "--accent-color-ring": palette.ring,
    }


def apply_theme(accent_color: str, theme: Theme, dark_mode: ui.dark_mode) -> Palette:
    """Apply accent variables and light/dark mode to the current page.

    Everything goes through the page's single body query, so repeated
    calls update styles in place without adding elements.
    """
    palette = derive_palette(accent_color)
    variables = css_variables(palette) | {"--q-primary": palette.base}
    style = "; ".join(f"{name}: {value}" for name, value in variables.items())
    ui.query("body").style(add=style)
    dark_mode.set_value(theme is Theme.DARK)
    return palette
