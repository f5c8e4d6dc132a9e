"""
Bond and molecular dipoles.

Bond dipoles come either from partial charges (advanced models) or from the
electronegativity difference of the two atoms. Vectors always point from the
positive to the negative end, in Debye; the user's preferred arrow convention
is applied when arrows are placed.
"""

import numpy as np

from linus.core.constants import (
    E_ANGSTROM_PER_DEBYE,
    DIPOLE_SUM_EPSILON,
    DIPOLE_BASE_SCALE,
    DIPOLE_SCALE_MULTIPLIER,
)
from linus.core.molecule import Bond, Molecule
from linus.core.settings import ModelSettings


def _charge_difference(bond: Bond, settings: ModelSettings) -> float:
    """qA - qB under the selected charge model."""
    model = settings.bond_dipole_model
    return bond.atom_a.partial_charge(model) - bond.atom_b.partial_charge(model)


def _electronegativity_difference(bond: Bond) -> float:
    """enB - enA on the display scale."""
    return bond.atom_b.element.display_electronegativity - bond.atom_a.element.display_electronegativity


def bond_dipole_direction(bond: Bond, settings: ModelSettings) -> np.ndarray:
    """
    Unit vector of a bond dipole.

    A->B when A is the positive end (qA - qB >= 0) or B the more
    electronegative atom (enB - enA >= 0); B->A otherwise.
    """
    if settings.uses_partial_charges:
        toward_b = _charge_difference(bond, settings) >= 0
    else:
        toward_b = _electronegativity_difference(bond) >= 0
    return bond.direction if toward_b else -bond.direction


def bond_dipole_magnitude(bond: Bond, settings: ModelSettings) -> float:
    """Bond dipole magnitude in Debye."""
    if settings.uses_partial_charges:
        half_difference = abs(_charge_difference(bond, settings) / 2)
        return half_difference * bond.distance / E_ANGSTROM_PER_DEBYE
    return abs(_electronegativity_difference(bond))


def bond_dipole_vector(bond: Bond, settings: ModelSettings) -> np.ndarray:
    return bond_dipole_direction(bond, settings) * bond_dipole_magnitude(bond, settings)


def bond_dipoles(molecule: Molecule, settings: ModelSettings) -> np.ndarray:
    """(N_bonds, 3) bond dipole vectors in bond order."""
    if not molecule.bonds:
        return np.zeros((0, 3))
    return np.array([bond_dipole_vector(b, settings) for b in molecule.bonds])


def molecular_dipole(molecule: Molecule, settings: ModelSettings) -> np.ndarray:
    """Vector sum of all bond dipoles."""
    return bond_dipoles(molecule, settings).sum(axis=0)


def dipole_scale(molecule: Molecule, settings: ModelSettings) -> float:
    """
    Arrow length per Debye.

    Rescales so the summed molecular dipole is drawn with the length of the
    reference (ab-initio) dipole.
    """
    total = float(np.linalg.norm(molecular_dipole(molecule, settings)))
    base = DIPOLE_SCALE_MULTIPLIER * DIPOLE_BASE_SCALE
    if total <= DIPOLE_SUM_EPSILON:
        return base
    return float(np.linalg.norm(molecule.reference_dipole)) / total * base


def orientation_sign(settings: ModelSettings) -> int:
    """+1 to draw dipoles positive to negative, -1 for the reverse convention."""
    return settings.orientation_sign
