"""
Scalar-to-color mapping for molecular surfaces and atoms.

All colorize functions accept a scalar or a numpy array and return RGB in
[0, 1] with a trailing axis of 3, so whole surfaces are colored at once.
"""

import math
from enum import Enum
from typing import Optional

import numpy as np
from matplotlib.colors import ListedColormap, to_rgb

from linus.core.constants import (
    RWB_POTENTIAL_SCALE,
    ROYGB_POTENTIAL_SCALE,
    ROYGB_GRADIENT,
    ADVANCED_DENSITY_SCALE,
    ADVANCED_DENSITY_EASING_POWER,
    SIMPLIFIED_DENSITY_SCALE,
    SRGB_LINEAR_THRESHOLD,
    LIGHT_FOREGROUND_ELEMENTS,
)
from linus.core.elements import Element
from linus.core.field import surface_values
from linus.core.molecule import Molecule
from linus.core.settings import ModelSettings, SurfaceColor, SurfaceType


class SurfacePalette(str, Enum):
    RWB = "RWB"
    ROYGB = "ROYGB"
    DENSITY_ADVANCED = "densityAdvanced"
    DENSITY_SIMPLIFIED = "densitySimplified"


def _gray(values: np.ndarray) -> np.ndarray:
    return np.repeat(values[..., None], 3, axis=-1)


def colorize_potential_rwb(value) -> np.ndarray:
    """Red (negative) / white (zero) / blue (positive) potential palette."""
    scaled = np.asarray(value, dtype=float) * RWB_POTENTIAL_SCALE
    positive = np.clip(1 - scaled, 0, 1)
    negative = np.clip(1 + scaled, 0, 1)
    ones = np.ones_like(scaled)
    return np.where(
        (scaled > 0)[..., None],
        np.stack([positive, positive, ones], axis=-1),
        np.stack([ones, negative, negative], axis=-1),
    )


_ROYGB = np.array(ROYGB_GRADIENT, dtype=float)


def colorize_potential_roygb(value) -> np.ndarray:
    """Jmol rainbow potential palette, red (negative) through green to blue (positive)."""
    t = np.clip((np.asarray(value, dtype=float) * ROYGB_POTENTIAL_SCALE + 1) / 2, 0, 1)
    position = t * (len(_ROYGB) - 1)
    lower = np.clip(np.floor(position).astype(int), 0, len(_ROYGB) - 1)
    upper = np.clip(lower + 1, 0, len(_ROYGB) - 1)
    fraction = (position - lower)[..., None]
    return (_ROYGB[lower] * (1 - fraction) + _ROYGB[upper] * fraction) / 255


def easing(n: float, t):
    """
    Symmetric ease-in-out curve of power n on [0, 1].

    easing(n, 1 - t) == 1 - easing(n, t), and easing(n, 0.5) == 0.5.
    """
    t = np.asarray(t, dtype=float)
    result = np.where(
        t < 0.5,
        0.5 * np.power(2 * t, n),
        1 - 0.5 * np.power(2 * (1 - t), n),
    )
    return float(result) if result.ndim == 0 else result


def colorize_density_advanced(value) -> np.ndarray:
    """Grayscale for precomputed densities, white where the density vanishes."""
    t = np.clip(1 - np.asarray(value, dtype=float) * ADVANCED_DENSITY_SCALE, 0, 1)
    return _gray(np.asarray(easing(ADVANCED_DENSITY_EASING_POWER, t)))


def colorize_density_simplified(value) -> np.ndarray:
    """Grayscale for the partial-charge model (fed with the Coulomb potential)."""
    t = np.clip(SIMPLIFIED_DENSITY_SCALE * np.asarray(value, dtype=float) / 2 + 0.5, 0, 1)
    return _gray(t)


_PALETTE_FUNCTIONS = {
    SurfacePalette.RWB: colorize_potential_rwb,
    SurfacePalette.ROYGB: colorize_potential_roygb,
    SurfacePalette.DENSITY_ADVANCED: colorize_density_advanced,
    SurfacePalette.DENSITY_SIMPLIFIED: colorize_density_simplified,
}

# Input range mapped onto the full palette
PALETTE_RANGES = {
    SurfacePalette.RWB: (-1 / RWB_POTENTIAL_SCALE, 1 / RWB_POTENTIAL_SCALE),
    SurfacePalette.ROYGB: (-1 / ROYGB_POTENTIAL_SCALE, 1 / ROYGB_POTENTIAL_SCALE),
    SurfacePalette.DENSITY_ADVANCED: (0.0, 1 / ADVANCED_DENSITY_SCALE),
    SurfacePalette.DENSITY_SIMPLIFIED: (-1 / SIMPLIFIED_DENSITY_SCALE, 1 / SIMPLIFIED_DENSITY_SCALE),
}


def colorize_surface(values: np.ndarray, palette: SurfacePalette) -> np.ndarray:
    """(N, 3) colors for an array of surface values."""
    colors = _PALETTE_FUNCTIONS[SurfacePalette(palette)](np.asarray(values, dtype=float))
    return colors.reshape(-1, 3)


def surface_palette(surface_type: SurfaceType, settings: ModelSettings) -> Optional[SurfacePalette]:
    """Palette for a surface type under the current settings (None for no surface)."""
    surface_type = SurfaceType(surface_type)
    if surface_type is SurfaceType.ELECTROSTATIC_POTENTIAL:
        if settings.surface_color is SurfaceColor.ROYGB:
            return SurfacePalette.ROYGB
        return SurfacePalette.RWB
    if surface_type is SurfaceType.ELECTRON_DENSITY:
        if settings.uses_precomputed_field:
            return SurfacePalette.DENSITY_ADVANCED
        return SurfacePalette.DENSITY_SIMPLIFIED
    return None


def surface_colors(molecule: Molecule, surface_type: SurfaceType, settings: ModelSettings) -> np.ndarray:
    """Per-vertex colors of a molecule's surface; empty when nothing is shown."""
    palette = surface_palette(surface_type, settings)
    values = surface_values(molecule, surface_type, settings)
    if palette is None or len(values) == 0:
        return np.zeros((0, 3))
    return colorize_surface(values, palette)


def palette_colormap(palette: SurfacePalette, n_colors: int = 256) -> ListedColormap:
    """Matplotlib colormap sampling a palette across its input range."""
    palette = SurfacePalette(palette)
    vmin, vmax = PALETTE_RANGES[palette]
    samples = np.linspace(vmin, vmax, n_colors)
    return ListedColormap(colorize_surface(samples, palette), name=f"linus_{palette.value}")


# =============================================================================
# Linearization
# =============================================================================

def _srgb_to_linear(channel):
    channel = np.asarray(channel, dtype=float)
    return np.where(
        channel <= SRGB_LINEAR_THRESHOLD,
        channel / 12.92,
        np.power((channel + 0.055) / 1.055, 2.4),
    )


def _round_symmetric(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def color_to_linear(color: tuple[int, int, int]) -> tuple[int, int, int]:
    """Linearize an 8-bit sRGB color, keeping 8-bit channels."""
    linear = _srgb_to_linear(np.asarray(color, dtype=float) / 255)
    return tuple(_round_symmetric(c * 255) for c in linear)


def direct_colors_to_linear(color) -> np.ndarray:
    """Linearize float sRGB channels in [0, 1]."""
    return _srgb_to_linear(color)


# =============================================================================
# Element Colors
# =============================================================================

def element_color(element: Element) -> str:
    """Base display color of an element (hex)."""
    return element.color


def element_linear_color(element: Element) -> tuple[int, int, int]:
    """8-bit linearized display color of an element."""
    rgb = tuple(_round_symmetric(c * 255) for c in to_rgb(element.color))
    return color_to_linear(rgb)


def element_foreground_color(element: Element) -> str:
    """Label color drawn on top of an atom."""
    if element.atomic_number in LIGHT_FOREGROUND_ELEMENTS:
        return 'white'
    return 'black'
