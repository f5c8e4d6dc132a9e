"""
Physical and application constants for Linus.

Centralizes magic numbers used throughout the codebase.
"""

# =============================================================================
# Physical Constants
# =============================================================================

# Elementary charge times Angstrom per Debye (1 D = 0.208194 e·Å)
E_ANGSTROM_PER_DEBYE = 0.208194

# =============================================================================
# Element Data
# =============================================================================

# Atomic number to symbol mapping (the supported element set)
Z_TO_SYMBOL = {
    1: 'H', 5: 'B', 6: 'C', 7: 'N', 8: 'O', 9: 'F', 17: 'Cl',
}

# Symbol to atomic number mapping
SYMBOL_TO_Z = {v: k for k, v in Z_TO_SYMBOL.items()}

# Van der Waals radii in Angstroms, the same radii the molecular surfaces
# were triangulated with
VDW_RADII = {
    1: 1.20, 5: 1.92, 6: 1.70, 7: 1.55, 8: 1.52, 9: 1.47, 17: 1.75,
}

# Pauling electronegativities (reference values, not used for dipoles)
PAULING_ELECTRONEGATIVITY = {
    1: 2.20, 5: 2.04, 6: 2.55, 7: 3.04, 8: 3.44, 9: 3.98, 17: 3.16,
}

# Electronegativities shown to students and used for electronegativity-based
# bond dipoles
DISPLAY_ELECTRONEGATIVITY = {
    1: 2.1, 5: 2.0, 6: 2.5, 7: 3.0, 8: 3.5, 9: 4.0, 17: 3.0,
}

# CPK colors for element visualization (hex, Jmol scheme)
ELEMENT_COLORS = {
    1: '#FFFFFF',   # H - white
    5: '#FFB5B5',   # B - salmon
    6: '#909090',   # C - gray
    7: '#3050F8',   # N - blue
    8: '#FF0D0D',   # O - red
    9: '#90E050',   # F - green
    17: '#1FF01F',  # Cl - green
}

# Elements whose labels are drawn in white on top of the atom color
LIGHT_FOREGROUND_ELEMENTS = {6, 7, 8}

HALOGENS = {9, 17}

# Display radius as a fraction of the van der Waals radius
ATOM_DISPLAY_RADIUS_SCALE = 0.25

# =============================================================================
# Dipole Settings
# =============================================================================

# Summed bond dipole magnitudes at or below this are treated as zero
DIPOLE_SUM_EPSILON = 1e-5

# Arrow length per Debye before rescaling to the reference dipole
DIPOLE_BASE_SCALE = 0.25
DIPOLE_SCALE_MULTIPLIER = 3

# Molecular dipoles at or below this magnitude are not drawn
DIPOLE_VISIBILITY_THRESHOLD = 2e-3

# Cosine of the cone (about 18 degrees) in which an atom counts as aligned
# with the molecular dipole
DIPOLE_ALIGNMENT_COSINE = 0.95

# =============================================================================
# Placement Geometry (Angstroms)
# =============================================================================

# Offset of a bond dipole arrow from the bond centerline
BOND_DIPOLE_OFFSET = 0.4

# Offset multiplier by bond order, wider bonds push the arrow out
BOND_DIPOLE_OFFSET_SCALES = {3: 1.3, 2: 1.1}
DEFAULT_BOND_DIPOLE_OFFSET_SCALE = 0.9

# Bond dipole arrows shorter than this fraction of the bond are drawn at the
# minimum geometry length and scaled down uniformly
BOND_DIPOLE_MIN_LENGTH_FRACTION = 0.72
MOLECULAR_DIPOLE_MIN_LENGTH_FRACTION = 0.6
MIN_ARROW_LENGTH = 0.2

# Gap between the central atom surface and the molecular dipole tail
MOLECULAR_DIPOLE_TAIL_GAP = 0.07

BOND_RADIUS = 0.085
BOND_SEPARATION = BOND_RADIUS * (12 / 5)

SUPPORTED_BOND_ORDERS = (1, 1.5, 2, 3)

# =============================================================================
# Color Mapping
# =============================================================================

# Multiplier applied to potentials before the red/white/blue mapping
RWB_POTENTIAL_SCALE = 15

# Multiplier applied to potentials before normalizing into the ROYGB gradient
ROYGB_POTENTIAL_SCALE = 8

# Multiplier and easing power for precomputed electron densities
ADVANCED_DENSITY_SCALE = 200
ADVANCED_DENSITY_EASING_POWER = 3

# Multiplier for the partial-charge (legacy) density mapping
SIMPLIFIED_DENSITY_SCALE = 15

# sRGB transfer function breakpoint
SRGB_LINEAR_THRESHOLD = 0.0404482362771082

NEUTRAL_POTENTIAL_COLOR = (31, 247, 0)

# Jmol's ROYGB gradient, ordered negative (red) to positive (blue)
# See http://jmol.sourceforge.net/jscolors/#gradnt
ROYGB_GRADIENT = [
    (255, 0, 0),
    (242, 30, 0),
    (247, 62, 0),
    (247, 93, 0),
    (247, 124, 0),
    (247, 155, 0),
    (244, 214, 0),
    (244, 230, 0),
    (242, 242, 0),
    (227, 227, 0),
    (217, 247, 0),
    (180, 242, 0),
    (121, 247, 0),
    (93, 247, 0),
    (61, 242, 0),
    NEUTRAL_POTENTIAL_COLOR,
    (0, 244, 0),
    (0, 244, 31),
    (0, 247, 93),
    (0, 247, 124),
    (0, 247, 155),
    (0, 250, 188),
    (0, 243, 217),
    (0, 247, 247),
    (0, 184, 244),
    (0, 153, 244),
    (0, 121, 242),
    (0, 89, 236),
    (0, 60, 239),
    (0, 30, 242),
    (0, 0, 255),
]

MOLECULAR_DIPOLE_COLOR = '#FFC800'
BOND_DIPOLE_COLOR = '#000000'
BOND_COLOR = '#5A5A5A'

# Surface opacity in exported figures
SURFACE_ALPHA = 0.5

# =============================================================================
# Output Settings
# =============================================================================

# A5 page size in inches (148 × 210 mm)
PAGE_SIZE_A5 = (5.83, 8.27)

# Default 3D view (degrees)
DEFAULT_ELEVATION = 20
DEFAULT_AZIMUTH = -60
