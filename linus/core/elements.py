"""
Supported chemical elements.

The catalog only contains H, B, C, N, O, F and Cl. Every per-element lookup
(radius, electronegativity, color) goes through this enum, so an unknown
symbol fails once, loudly, when a molecule is assembled.
"""

from enum import Enum

from linus.core.constants import (
    Z_TO_SYMBOL,
    SYMBOL_TO_Z,
    VDW_RADII,
    PAULING_ELECTRONEGATIVITY,
    DISPLAY_ELECTRONEGATIVITY,
    ELEMENT_COLORS,
    HALOGENS,
)
from linus.core.errors import ConfigurationError


class Element(Enum):
    """Element identified by its atomic number."""
    H = 1
    B = 5
    C = 6
    N = 7
    O = 8
    F = 9
    Cl = 17

    @classmethod
    def from_symbol(cls, symbol: str) -> "Element":
        """Look up an element by symbol, e.g. 'Cl'."""
        z = SYMBOL_TO_Z.get(symbol)
        if z is None:
            raise ConfigurationError(f"Unsupported element: {symbol!r}")
        return cls(z)

    @property
    def atomic_number(self) -> int:
        return self.value

    @property
    def symbol(self) -> str:
        return Z_TO_SYMBOL[self.value]

    @property
    def vdw_radius(self) -> float:
        """Van der Waals radius in Angstrom."""
        return VDW_RADII[self.value]

    @property
    def electronegativity(self) -> float:
        """Pauling electronegativity (reference data)."""
        return PAULING_ELECTRONEGATIVITY[self.value]

    @property
    def display_electronegativity(self) -> float:
        """Rounded electronegativity used for the electronegativity dipole model."""
        return DISPLAY_ELECTRONEGATIVITY[self.value]

    @property
    def color(self) -> str:
        """CPK color as a hex string."""
        return ELEMENT_COLORS[self.value]

    @property
    def is_halogen(self) -> bool:
        return self.value in HALOGENS
