"""
In-memory molecule model.

Atoms and bonds live in flat tuples owned by the Molecule. Bonds hold
references to their two atoms; atoms only keep the indices of their incident
bonds, so there are no reference cycles.
"""

from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Optional

import numpy as np

from linus.core.constants import ATOM_DISPLAY_RADIUS_SCALE
from linus.core.elements import Element
from linus.core.errors import ConfigurationError
from linus.core.settings import BondDipoleModel


class MolecularGeometry(str, Enum):
    LINEAR = "linear"
    BENT = "bent"
    TRIGONAL_PLANAR = "trigonalPlanar"
    TRIGONAL_PYRAMIDAL = "trigonalPyramidal"
    TETRAHEDRAL = "tetrahedral"


def _frozen_vector(values) -> np.ndarray:
    vector = np.array(values, dtype=float).reshape(3)
    vector.setflags(write=False)
    return vector


@dataclass(frozen=True, eq=False)
class Atom:
    """Single atom of an assembled molecule."""
    index: int
    element: Element
    simplified_charge: float
    position: np.ndarray  # (3,) Angstrom, centered frame
    advanced_charges: dict = field(default_factory=dict)  # BondDipoleModel -> charge
    bond_indices: tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'position', _frozen_vector(self.position))

    @property
    def symbol(self) -> str:
        return self.element.symbol

    @property
    def bond_count(self) -> int:
        return len(self.bond_indices)

    @property
    def display_radius(self) -> float:
        """Radius of the rendered sphere in Angstrom."""
        return ATOM_DISPLAY_RADIUS_SCALE * self.element.vdw_radius

    def partial_charge(self, model: BondDipoleModel) -> float:
        """
        Partial charge of this atom under a charge model.

        Raises:
            ConfigurationError: if the model has no charge for this atom
        """
        model = BondDipoleModel(model)
        if model is BondDipoleModel.JAVA:
            return self.simplified_charge
        if model is BondDipoleModel.ELECTRONEGATIVITY:
            raise ConfigurationError("The electronegativity model has no partial charges")
        try:
            return self.advanced_charges[model]
        except KeyError:
            raise ConfigurationError(
                f"No {model.value} partial charge for atom {self.index} ({self.symbol})"
            ) from None


@dataclass(frozen=True, eq=False)
class Bond:
    """Bond between two atoms of the same molecule."""
    index: int
    atom_a: Atom
    atom_b: Atom
    order: float  # 1, 2, 3, or 1.5 for resonance (ozone)
    initially_reversed: bool = False

    @property
    def distance(self) -> float:
        """Distance between the two atoms (Angstrom)."""
        return float(np.linalg.norm(self.atom_b.position - self.atom_a.position))

    @property
    def direction(self) -> np.ndarray:
        """Unit vector from atom A to atom B."""
        delta = self.atom_b.position - self.atom_a.position
        return delta / np.linalg.norm(delta)

    @property
    def visible_length(self) -> float:
        """Length of the bond not covered by the two atom spheres."""
        covered = self.atom_a.display_radius + self.atom_b.display_radius
        return max(0.0, self.distance - covered)

    @property
    def visible_center(self) -> np.ndarray:
        """Midpoint of the exposed part of the bond."""
        direction = self.direction
        start = self.atom_a.position + direction * self.atom_a.display_radius
        end = self.atom_b.position - direction * self.atom_b.display_radius
        return (start + end) / 2.0

    def contains(self, atom: Atom) -> bool:
        return atom is self.atom_a or atom is self.atom_b

    def other_atom(self, atom: Atom) -> Atom:
        """The endpoint that is not `atom`."""
        if atom is self.atom_a:
            return self.atom_b
        if atom is self.atom_b:
            return self.atom_a
        raise ValueError(f"Atom {atom.index} is not an endpoint of bond {self.index}")


@dataclass(frozen=True, eq=False)
class SurfaceVertex:
    """Vertex on the van der Waals surface with its precomputed samples."""
    position: np.ndarray
    normal: np.ndarray
    esp_value: float  # Eh/e
    density_value: float  # e/a0^3

    def __post_init__(self):
        object.__setattr__(self, 'position', _frozen_vector(self.position))
        object.__setattr__(self, 'normal', _frozen_vector(self.normal))


@dataclass(frozen=True, eq=False)
class Surface:
    """Triangulated molecular surface."""
    vertices: tuple[SurfaceVertex, ...] = ()
    faces: tuple[tuple[int, int, int], ...] = ()

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def is_empty(self) -> bool:
        return not self.vertices

    @property
    def positions(self) -> np.ndarray:
        """(N, 3) vertex positions."""
        if not self.vertices:
            return np.zeros((0, 3))
        return np.array([v.position for v in self.vertices])

    @property
    def esp_values(self) -> np.ndarray:
        return np.array([v.esp_value for v in self.vertices], dtype=float)

    @property
    def density_values(self) -> np.ndarray:
        return np.array([v.density_value for v in self.vertices], dtype=float)

    def face_vertices(self, face_index: int) -> tuple[SurfaceVertex, SurfaceVertex, SurfaceVertex]:
        i, j, k = self.faces[face_index]
        return self.vertices[i], self.vertices[j], self.vertices[k]


@dataclass(frozen=True, eq=False)
class Molecule:
    """Assembled molecule: atoms, bonds, surface and reference dipole."""
    symbol: str
    full_name: str
    geometry: MolecularGeometry
    atoms: tuple[Atom, ...]
    bonds: tuple[Bond, ...]
    surface: Surface
    reference_dipole: np.ndarray  # (3,) ab-initio molecular dipole, Debye
    central_index: Optional[int] = None
    origin_offset: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        object.__setattr__(self, 'reference_dipole', _frozen_vector(self.reference_dipole))
        object.__setattr__(self, 'origin_offset', _frozen_vector(self.origin_offset))

    @property
    def atom_count(self) -> int:
        return len(self.atoms)

    @property
    def central_atom(self) -> Optional[Atom]:
        if self.central_index is None:
            return None
        return self.atoms[self.central_index]

    @property
    def positions(self) -> np.ndarray:
        """(N, 3) atom positions."""
        return np.array([a.position for a in self.atoms])

    @property
    def simplified_charges(self) -> np.ndarray:
        return np.array([a.simplified_charge for a in self.atoms], dtype=float)

    @property
    def available_charge_models(self) -> list[BondDipoleModel]:
        """Charge models every atom has a value for."""
        models = [BondDipoleModel.ELECTRONEGATIVITY, BondDipoleModel.JAVA]
        for model in BondDipoleModel:
            if model in models:
                continue
            if self.atoms and all(model in a.advanced_charges for a in self.atoms):
                models.append(model)
        return models

    def bonds_of(self, atom: Atom) -> list[Bond]:
        """Bonds incident to an atom."""
        return [self.bonds[i] for i in atom.bond_indices]

    def bond_between(self, first: Atom, second: Atom) -> Optional[Bond]:
        for bond in self.bonds_of(first):
            if bond.contains(second):
                return bond
        return None

    def maximum_extent(self) -> float:
        """Largest distance between two atom centers."""
        extent = 0.0
        for a, b in combinations(self.atoms, 2):
            extent = max(extent, float(np.linalg.norm(a.position - b.position)))
        return extent
