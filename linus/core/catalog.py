"""
Catalog of the 19 molecules shown by Linus.

Holds the static per-molecule tables:
- names and geometry classes
- simplified (hand-curated) partial charges
- customization (bond order overrides, pre-flipped bond dipoles)
- built-in geometry, used when no precomputed data file is available
"""

from dataclasses import dataclass, field
from typing import Optional

from linus.core.errors import ConfigurationError
from linus.core.molecule import MolecularGeometry


@dataclass(frozen=True)
class MoleculeCustomization:
    """Per-molecule adjustments applied during assembly."""
    # (indexA, indexB) -> bond order, for bonds drawn differently than the raw data
    bond_order_overrides: dict = field(default_factory=dict)
    # (indexA, indexB) pairs whose bond dipoles start on the other side
    initial_bond_dipoles_reversed: tuple = ()
    # Initial view rotation as a quaternion (x, y, z, w); used by viewers only
    initial_orientation: Optional[tuple[float, float, float, float]] = None


@dataclass(frozen=True)
class CatalogEntry:
    """Static description of one catalog molecule."""
    symbol: str
    full_name: str
    geometry: MolecularGeometry
    simplified_charges: dict  # element symbol (optionally + bond count) -> charge
    customization: MoleculeCustomization = field(default_factory=MoleculeCustomization)


_G = MolecularGeometry

CATALOG = {
    entry.symbol: entry for entry in [
        CatalogEntry('H2', 'hydrogen', _G.LINEAR, {'H': 0.0}),
        CatalogEntry('N2', 'nitrogen', _G.LINEAR, {'N': 0.0}),
        CatalogEntry('O2', 'oxygen', _G.LINEAR, {'O': 0.0}),
        CatalogEntry('F2', 'fluorine', _G.LINEAR, {'F': 0.0}),
        CatalogEntry('HF', 'hydrogen fluoride', _G.LINEAR, {'F': -0.430703, 'H': 0.430703}),
        CatalogEntry('H2O', 'water', _G.BENT, {'H': 0.376285, 'O': -0.752569}),
        CatalogEntry('CO2', 'carbon dioxide', _G.LINEAR, {'C': 0.685248, 'O': -0.342624}),
        CatalogEntry('HCN', 'hydrogen cyanide', _G.LINEAR,
                     {'C': 0.047988, 'N': -0.282540, 'H': 0.234552}),
        # The central oxygen has two bonds, the terminal ones have one
        CatalogEntry('O3', 'ozone', _G.BENT, {'O2': 0.242265, 'O1': -0.121133},
                     MoleculeCustomization(bond_order_overrides={(0, 1): 1.5, (0, 2): 1.5})),
        CatalogEntry('NH3', 'ammonia', _G.TRIGONAL_PYRAMIDAL, {'N': -1.009460, 'H': 0.337416},
                     MoleculeCustomization(initial_bond_dipoles_reversed=((0, 1),))),
        CatalogEntry('BH3', 'borane', _G.TRIGONAL_PLANAR, {'B': 0.301318, 'H': -0.100417}),
        CatalogEntry('BF3', 'boron trifluoride', _G.TRIGONAL_PLANAR, {'B': 0.842505, 'F': -0.280358}),
        CatalogEntry('CH2O', 'formaldehyde', _G.TRIGONAL_PLANAR,
                     {'C': 0.270184, 'H': 0.038366, 'O': -0.346916}),
        CatalogEntry('CH4', 'methane', _G.TETRAHEDRAL, {'C': -0.802069, 'H': 0.200517}),
        CatalogEntry('CH3F', 'fluoromethane', _G.TETRAHEDRAL,
                     {'C': -0.230517, 'F': -0.166365, 'H': 0.132281},
                     MoleculeCustomization(initial_bond_dipoles_reversed=((0, 1),))),
        CatalogEntry('CH2F2', 'difluoromethane', _G.TETRAHEDRAL,
                     {'C': 0.100550, 'F': -0.159942, 'H': 0.109667}),
        CatalogEntry('CHF3', 'trifluoromethane', _G.TETRAHEDRAL,
                     {'C': 0.282658, 'F': -0.135350, 'H': 0.123152},
                     MoleculeCustomization(initial_bond_dipoles_reversed=((3, 4),))),
        CatalogEntry('CF4', 'tetrafluoromethane', _G.TETRAHEDRAL, {'C': 0.423049, 'F': -0.105762}),
        CatalogEntry('CHCl3', 'chloroform', _G.TETRAHEDRAL,
                     {'C': -0.025406, 'Cl': -0.052227, 'H': 0.182373},
                     MoleculeCustomization(initial_bond_dipoles_reversed=((3, 4),))),
    ]
}

# Display order
MOLECULE_SYMBOLS = list(CATALOG)

DEFAULT_MOLECULE = 'HF'


def get_entry(symbol: str) -> CatalogEntry:
    """Catalog entry for a molecule symbol."""
    try:
        return CATALOG[symbol]
    except KeyError:
        raise ConfigurationError(f"Unknown molecule: {symbol!r}") from None


# =============================================================================
# Built-in Geometry
# =============================================================================

# Atoms as (symbol, x, y, z, point charge) in Angstrom and e, bonds as
# (indexA, indexB, order). The point charges give the reference dipole when
# no ab-initio dipole is available.
BUILTIN_GEOMETRY = {
    'BF3': (
        [('B', 0.0, 0.0, 0.0, 0.842505),
         ('F', 1.317730477, 0.0, 0.0, -0.281790),
         ('F', -0.658865212, -1.141188034, 0.0, -0.280358),
         ('F', -0.658865212, 1.141188034, 0.0, -0.280358)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1)],
    ),
    'BH3': (
        [('B', 0.0, 0.0, 0.0, 0.301318),
         ('H', 1.194020007, 0.0, 0.0, -0.100484),
         ('H', -0.597010030, 1.034051652, 0.0, -0.100417),
         ('H', -0.597010030, -1.034051652, 0.0, -0.100417)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1)],
    ),
    'CF4': (
        [('C', 0.0, 0.0, 0.0, 0.423049),
         ('F', 0.767550071, 0.767550071, 0.767550071, -0.105762),
         ('F', -0.767550071, -0.767550071, 0.767550071, -0.105762),
         ('F', -0.767550071, 0.767550071, -0.767550071, -0.105762),
         ('F', 0.767550071, -0.767550071, -0.767550071, -0.105762)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1), (0, 4, 1)],
    ),
    'CH2F2': (
        [('C', 0.0, 0.508880377, 0.0, 0.100550),
         ('F', -0.849638760, -0.279924721, 0.712931573, -0.159942),
         ('F', 0.849638760, -0.279924721, -0.712931573, -0.159942),
         ('H', 0.584571302, 1.120073795, 0.696664989, 0.109667),
         ('H', -0.584571302, 1.120073795, -0.696664989, 0.109667)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1), (0, 4, 1)],
    ),
    'CH2O': (
        [('C', 0.0, -0.513414193, 0.0, 0.270184),
         ('H', 0.937733342, -1.108161039, 0.0, 0.038366),
         ('H', -0.937733342, -1.108161039, 0.0, 0.038366),
         ('O', 0.0, 0.693037081, 0.0, -0.346916)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 2)],
    ),
    'CH3F': (
        [('C', 0.0, -0.544634581, -0.314444929, -0.230517),
         ('F', 0.0, 0.653285682, 0.377174675, -0.166365),
         ('H', 0.894500911, -0.605355263, -0.945836067, 0.132320),
         ('H', 0.000000022, -1.380015731, 0.395915449, 0.132281),
         ('H', -0.894500971, -0.605355263, -0.945836067, 0.132281)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1), (0, 4, 1)],
    ),
    'CH4': (
        [('C', 0.0, 0.0, 0.0, -0.802069),
         ('H', 0.631308955, 0.631308955, 0.631308955, 0.200517),
         ('H', -0.631308955, -0.631308955, 0.631308955, 0.200517),
         ('H', -0.631308955, 0.631308955, -0.631308955, 0.200517),
         ('H', 0.631308955, -0.631308955, -0.631308955, 0.200517)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1), (0, 4, 1)],
    ),
    'CHCl3': (
        [('C', 0.0, 0.426947296, 0.199088797, -0.025406),
         ('Cl', 1.679749846, 0.064339414, -0.296802193, -0.052513),
         ('Cl', -0.583371043, -0.738205731, 1.424261451, -0.052227),
         ('Cl', -1.096378803, 0.491364837, -1.212561131, -0.052227),
         ('H', 0.0, 1.410846233, 0.657888472, 0.182373)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1), (0, 4, 1)],
    ),
    'CHF3': (
        [('C', 0.0, 0.306679815, 0.143007144, 0.282658),
         ('F', 1.238681555, -0.024709182, -0.252514124, -0.135111),
         ('F', -0.430189639, -0.616522312, 1.016633272, -0.135350),
         ('F', -0.808491945, 0.290188044, -0.927813411, -0.135350),
         ('H', 0.0, 1.297120094, 0.604857028, 0.123152)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1), (0, 4, 1)],
    ),
    'CO2': (
        [('C', 0.000000053, 0.0, 0.0, 0.685248),
         ('O', 1.169151228, 0.0, 0.0, -0.342624),
         ('O', -1.169151228, 0.0, 0.0, -0.342624)],
        [(0, 1, 2), (0, 2, 2)],
    ),
    'F2': (
        [('F', 0.701463749, 0.0, 0.0, 0.0),
         ('F', -0.701463749, 0.0, 0.0, 0.0)],
        [(0, 1, 1)],
    ),
    'H2': (
        [('H', 0.371398326, 0.0, 0.0, 0.0),
         ('H', -0.371398326, 0.0, 0.0, 0.0)],
        [(0, 1, 1)],
    ),
    'H2O': (
        [('H', 0.761229899, -0.478138566, 0.0, 0.376285),
         ('O', 0.0, 0.120865773, 0.0, -0.752569),
         ('H', -0.761229899, -0.478138566, 0.0, 0.376285)],
        [(0, 1, 1), (1, 2, 1)],
    ),
    'HCN': (
        [('C', -0.507116828, 0.0, 0.0, 0.047988),
         ('N', 0.649877246, 0.0, 0.0, -0.282540),
         ('H', -1.577592738, 0.0, 0.0, 0.234552)],
        [(0, 1, 3), (0, 2, 1)],
    ),
    'HF': (
        [('F', 0.088719117, 0.0, 0.0, -0.430703),
         ('H', -0.845032750, 0.0, 0.0, 0.430703)],
        [(0, 1, 1)],
    ),
    'N2': (
        [('N', 0.552776918, 0.0, 0.0, 0.0),
         ('N', -0.552776918, 0.0, 0.0, 0.0)],
        [(0, 1, 3)],
    ),
    'NH3': (
        [('N', 0.0, 0.126805440, 0.073211156, -1.009460),
         ('H', 0.812950611, 0.017126748, -0.532078981, 0.337416),
         ('H', 0.000000004, -0.686909199, 0.687346876, 0.336022),
         ('H', -0.812950611, 0.017126746, -0.532078862, 0.336022)],
        [(0, 1, 1), (0, 2, 1), (0, 3, 1)],
    ),
    'O2': (
        [('O', 0.607254209, 0.0, 0.0, 0.0),
         ('O', -0.607254209, 0.0, 0.0, 0.0)],
        [(0, 1, 2)],
    ),
    'O3': (
        [('O', 0.0, 0.434529301, 0.0, 0.242265),
         ('O', -1.083210079, -0.217264624, 0.0, -0.121133),
         ('O', 1.083210079, -0.217264624, 0.0, -0.121133)],
        [(0, 1, 1), (0, 2, 1)],
    ),
}
