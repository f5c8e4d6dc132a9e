"""
Placement geometry for dipole arrows and bond cylinders.

Everything here is a pure function of the molecule, the settings and the
viewer position. Side selection for bond dipole arrows depends on the side
chosen in the previous frame; that memory is an explicit PlacementState the
caller keeps per bond and passes back in.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from linus.core.constants import (
    BOND_DIPOLE_OFFSET,
    BOND_DIPOLE_OFFSET_SCALES,
    DEFAULT_BOND_DIPOLE_OFFSET_SCALE,
    BOND_DIPOLE_MIN_LENGTH_FRACTION,
    MOLECULAR_DIPOLE_MIN_LENGTH_FRACTION,
    MIN_ARROW_LENGTH,
    MOLECULAR_DIPOLE_TAIL_GAP,
    DIPOLE_VISIBILITY_THRESHOLD,
    BOND_SEPARATION,
    SUPPORTED_BOND_ORDERS,
)
from linus.core.dipoles import (
    bond_dipole_direction,
    bond_dipole_magnitude,
    dipole_scale,
    molecular_dipole,
)
from linus.core.errors import ConfigurationError
from linus.core.molecule import Bond, Molecule
from linus.core.settings import ModelSettings
from linus.core.symmetry import central_atom, symmetric_partner_bond

X_UNIT = np.array([1.0, 0.0, 0.0])
Y_UNIT = np.array([0.0, 1.0, 0.0])

# Squared length below which a cross product counts as degenerate
DEGENERATE_EPSILON = 1e-6


def _normalized(vector: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vector)
    if norm == 0:
        return np.zeros(3)
    return vector / norm


def _perpendicular_to(direction: np.ndarray, view_dir: np.ndarray) -> np.ndarray:
    """Unit vector perpendicular to a direction and the view direction."""
    perpendicular = np.cross(direction, view_dir)
    if np.dot(perpendicular, perpendicular) < DEGENERATE_EPSILON:
        # Looking straight down the axis, any perpendicular will do
        alt = Y_UNIT if abs(np.dot(direction, X_UNIT)) > 0.9 else X_UNIT
        perpendicular = np.cross(direction, alt)
    return _normalized(perpendicular)


def _min_arrow_length(length: float, fraction: float, reference: float) -> tuple[float, float]:
    """
    Geometry length and uniform scale of an arrow.

    Short arrows are built at a minimum length and shrunk uniformly, so the
    head keeps its proportions.
    """
    minimum = max(MIN_ARROW_LENGTH, fraction * reference)
    if length < minimum:
        return minimum, max(length / max(minimum, 1e-6), 0.0)
    return length, 1.0


@dataclass(frozen=True)
class PlacementState:
    """Side chosen for a bond dipole arrow in the previous frame."""
    last_side: Optional[np.ndarray] = None


def choose_offset_side(
    molecule: Molecule,
    bond: Bond,
    view_point: np.ndarray,
    state: Optional[PlacementState] = None,
) -> tuple[np.ndarray, PlacementState]:
    """
    Pick which side of a bond its dipole arrow is drawn on.

    Partner bonds get arrows pointing away from each other. Other bonds keep
    the side closest to the previous frame's, so the arrow doesn't jump while
    the molecule rotates.

    Args:
        molecule: Assembled molecule
        bond: Bond whose arrow is placed
        view_point: Camera position in the molecule frame
        state: Result of the previous call for this bond, if any

    Returns:
        (unit side vector, new state)
    """
    state = state or PlacementState()
    view_point = np.asarray(view_point, dtype=float)
    center = bond.visible_center
    bond_dir = bond.direction
    view_dir = _normalized(center - view_point)

    perpendicular = _perpendicular_to(bond_dir, view_dir)
    negated = -perpendicular
    # Exact ties and first frames fall back to the pre-reversed flag
    chosen = negated if bond.initially_reversed else perpendicular
    partner = symmetric_partner_bond(molecule, bond)
    if partner is not None:
        if np.dot(partner.direction, bond_dir) < -0.9:
            # Collinear partners (CO2): both arrows go to the same screen side
            if perpendicular[1] > 0:
                chosen = perpendicular
            elif perpendicular[1] < 0:
                chosen = negated
        else:
            central = central_atom(molecule)
            other = partner.other_atom(central)
            u = _normalized(bond_dir - view_dir * np.dot(bond_dir, view_dir))
            v = _normalized(np.cross(view_dir, u))
            w = _normalized(other.position - central.position)
            w_projected = _normalized(w - view_dir * np.dot(w, view_dir))
            s = np.dot(w_projected, v)
            if s > 0:
                chosen = perpendicular
            elif s < 0:
                chosen = negated
    elif state.last_side is not None:
        if np.dot(negated, state.last_side) > np.dot(perpendicular, state.last_side):
            chosen = negated
        else:
            chosen = perpendicular

    return chosen, PlacementState(last_side=chosen)


def inflate_offset(offset: float, atom_radius: float, relative_x: float, half_length: float) -> float:
    """
    Push an arrow far enough from an atom that it clears the atom sphere.

    Args:
        offset: Requested distance of the arrow from the bond axis
        atom_radius: Display radius of the atom
        relative_x: Axial position of the atom center relative to the arrow center
        half_length: Half the arrow length

    Returns:
        The offset, increased to sqrt(R^2 - dx^2) when the sphere reaches the
        arrow line; never decreased.
    """
    dx = max(0.0, abs(relative_x) - half_length)
    if dx < atom_radius:
        required = float(np.sqrt(atom_radius ** 2 - dx ** 2))
        return max(offset, required)
    return offset


def bond_dipole_offset(bond: Bond) -> float:
    """Base side offset of a bond dipole arrow; wider multiple bonds push it out."""
    scale = BOND_DIPOLE_OFFSET_SCALES.get(bond.order, DEFAULT_BOND_DIPOLE_OFFSET_SCALE)
    return BOND_DIPOLE_OFFSET * scale


@dataclass(frozen=True)
class BondDipolePlacement:
    """Where and how to draw one bond dipole arrow."""
    bond_index: int
    tail: np.ndarray
    direction: np.ndarray  # unit, after the orientation preference
    length: float  # drawn length
    geometry_length: float  # length the arrow mesh is built with
    uniform_scale: float  # applied to the whole arrow mesh
    side: np.ndarray  # unit side vector
    offset: float  # distance from the bond axis
    cross_axis: np.ndarray  # in-screen axis for the arrow's cross bar

    @property
    def head(self) -> np.ndarray:
        return self.tail + self.direction * self.length


def place_bond_dipole(
    molecule: Molecule,
    bond: Bond,
    settings: ModelSettings,
    view_point: np.ndarray,
    state: Optional[PlacementState] = None,
) -> tuple[BondDipolePlacement, PlacementState]:
    """
    Lay out the dipole arrow of one bond beside the bond.

    Returns:
        (placement, new state to pass in on the next frame)
    """
    view_point = np.asarray(view_point, dtype=float)
    side, new_state = choose_offset_side(molecule, bond, view_point, state)

    center = bond.visible_center
    length = max(0.0, bond_dipole_magnitude(bond, settings) * dipole_scale(molecule, settings))
    direction = bond_dipole_direction(bond, settings) * settings.orientation_sign

    offset = bond_dipole_offset(bond)
    for atom in (bond.atom_a, bond.atom_b):
        relative_x = float(np.dot(atom.position - center, bond.direction))
        offset = inflate_offset(offset, atom.display_radius, relative_x, length / 2)

    tail = center + side * offset - direction * (length / 2)

    # Cross bar faces the camera at the arrow position
    view_dir = _normalized(tail - view_point)
    cross_axis = direction - view_dir * np.dot(direction, view_dir)
    if np.dot(cross_axis, cross_axis) < DEGENERATE_EPSILON:
        alt = Y_UNIT if abs(np.dot(view_dir, X_UNIT)) > 0.9 else X_UNIT
        cross_axis = np.cross(view_dir, alt)

    geometry_length, uniform_scale = _min_arrow_length(
        length, BOND_DIPOLE_MIN_LENGTH_FRACTION, bond.distance
    )

    placement = BondDipolePlacement(
        bond_index=bond.index,
        tail=tail,
        direction=direction,
        length=length,
        geometry_length=geometry_length,
        uniform_scale=uniform_scale,
        side=side,
        offset=offset,
        cross_axis=_normalized(cross_axis),
    )
    return placement, new_state


@dataclass(frozen=True)
class MolecularDipolePlacement:
    """Where and how to draw the molecular dipole arrow."""
    tail: np.ndarray
    direction: np.ndarray
    length: float
    geometry_length: float
    uniform_scale: float

    @property
    def head(self) -> np.ndarray:
        return self.tail + self.direction * self.length


def place_molecular_dipole(molecule: Molecule, settings: ModelSettings) -> Optional[MolecularDipolePlacement]:
    """
    Lay out the molecular dipole arrow, starting at the central atom surface.

    Returns None when there is no central atom or the dipole is too small
    to draw.
    """
    central = central_atom(molecule)
    if central is None:
        return None

    dipole = molecular_dipole(molecule, settings)
    magnitude = float(np.linalg.norm(dipole))
    if magnitude <= DIPOLE_VISIBILITY_THRESHOLD:
        return None

    direction = dipole / magnitude * settings.orientation_sign
    tail = central.position + direction * (central.display_radius + MOLECULAR_DIPOLE_TAIL_GAP)
    length = max(0.0, magnitude * dipole_scale(molecule, settings))
    geometry_length, uniform_scale = _min_arrow_length(
        length, MOLECULAR_DIPOLE_MIN_LENGTH_FRACTION, molecule.maximum_extent()
    )

    return MolecularDipolePlacement(
        tail=tail,
        direction=direction,
        length=length,
        geometry_length=geometry_length,
        uniform_scale=uniform_scale,
    )


def bond_cylinder_offsets(molecule: Molecule, bond: Bond, view_point: np.ndarray) -> list[np.ndarray]:
    """
    Offsets from the bond midpoint of each cylinder drawn for a bond.

    Multiple bonds are spread perpendicular to the bond and the view
    direction. The two lines of a 1.5 bond are turned toward the reference
    molecular dipole.

    Raises:
        ConfigurationError: for bond orders other than 1, 1.5, 2 and 3
    """
    if bond.order not in SUPPORTED_BOND_ORDERS:
        raise ConfigurationError(f"Unsupported bond order {bond.order} in {molecule.symbol}")

    start = bond.atom_a.position
    end = bond.atom_b.position
    center = (start + end) / 2.0
    view_dir = _normalized(center - np.asarray(view_point, dtype=float))
    perpendicular = _perpendicular_to(_normalized(center - end), view_dir)

    if bond.order == 1.5 and np.dot(perpendicular, molecule.reference_dipole) < 0:
        perpendicular = -perpendicular

    if bond.order == 1:
        return [np.zeros(3)]
    if bond.order in (1.5, 2):
        return [perpendicular * (BOND_SEPARATION / 2), perpendicular * (-BOND_SEPARATION / 2)]
    return [np.zeros(3), perpendicular * BOND_SEPARATION, perpendicular * -BOND_SEPARATION]
