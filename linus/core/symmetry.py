"""
Symmetry queries used to place dipole arrows.

Handles:
- Finding the central atom
- Pairing chemically equivalent bonds so their arrows mirror each other
- Finding the atom hidden behind the molecular dipole arrow
"""

import logging
from typing import Optional

import numpy as np

from linus.core.constants import DIPOLE_ALIGNMENT_COSINE, DIPOLE_VISIBILITY_THRESHOLD
from linus.core.dipoles import molecular_dipole
from linus.core.elements import Element
from linus.core.molecule import Atom, Bond, Molecule
from linus.core.settings import ModelSettings

logger = logging.getLogger(__name__)


def find_central_index(elements: list[Element], bond_counts: list[int], label: str = "") -> Optional[int]:
    """
    Index of the central atom, or None.

    Diatomics: None when both atoms are the same element, else the halogen.
    Larger molecules: the atom with the most bonds, first index on ties.
    """
    if len(elements) == 2:
        if elements[0] is elements[1]:
            return None
        for index, element in enumerate(elements):
            if element.is_halogen:
                return index
        logger.warning(f"Heteronuclear diatomic {label} has no halogen, leaving it uncentered")
        return None
    if not elements:
        return None
    return int(np.argmax(bond_counts))


def central_atom(molecule: Molecule) -> Optional[Atom]:
    """Central atom of an assembled molecule, recomputed from its bonds."""
    index = find_central_index(
        [a.element for a in molecule.atoms],
        [a.bond_count for a in molecule.atoms],
        molecule.symbol,
    )
    if index is None:
        return None
    return molecule.atoms[index]


def symmetric_partner_bond(molecule: Molecule, bond: Bond) -> Optional[Bond]:
    """
    The one bond equivalent to `bond` around the central atom.

    Only bonds from the central atom to the same element as `bond`'s outer
    atom count. A partner exists only when exactly two such bonds exist.
    """
    central = central_atom(molecule)
    if central is None or not bond.contains(central):
        return None

    outer_element = bond.other_atom(central).element
    matching = [
        b for b in molecule.bonds_of(central)
        if b.other_atom(central).element is outer_element
    ]
    if len(matching) != 2:
        return None
    return matching[1] if matching[0] is bond else matching[0]


def dipole_aligned_atom(molecule: Molecule, settings: ModelSettings, orientation_sign: int = 1) -> Optional[Atom]:
    """
    Non-central atom lying along the drawn molecular dipole arrow.

    Returns the atom whose direction from the central atom is closest to the
    signed dipole direction, if it is within the alignment cone and the dipole
    is large enough to be drawn.
    """
    central = central_atom(molecule)
    if central is None:
        return None

    dipole = molecular_dipole(molecule, settings)
    magnitude = float(np.linalg.norm(dipole))
    if magnitude <= DIPOLE_VISIBILITY_THRESHOLD:
        return None
    direction = dipole / magnitude * orientation_sign

    best_atom = None
    best_dot = -np.inf
    for atom in molecule.atoms:
        if atom is central:
            continue
        offset = atom.position - central.position
        distance = np.linalg.norm(offset)
        if distance == 0:
            continue
        dot = float(np.dot(offset / distance, direction))
        if dot > best_dot:
            best_atom, best_dot = atom, dot

    if best_dot > DIPOLE_ALIGNMENT_COSINE:
        return best_atom
    return None


def dimmed_bonds(molecule: Molecule, settings: ModelSettings, orientation_sign: int = 1) -> list[Bond]:
    """Bonds drawn translucent so the molecular dipole arrow stays visible."""
    aligned = dipole_aligned_atom(molecule, settings, orientation_sign)
    central = central_atom(molecule)
    if aligned is None or central is None:
        return []
    bond = molecule.bond_between(central, aligned)
    return [bond] if bond is not None else []
