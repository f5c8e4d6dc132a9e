"""
Electrostatic potential and electron density on the molecular surface.

Two field models:
- precomputed: values sampled by the quantum chemistry pipeline at every
  surface vertex (advanced mode with the psi4 field model)
- partial charges: a classical Coulomb sum over the simplified charges,
  used for both the potential and the density
"""

import numpy as np

from linus.core.errors import GeometryError
from linus.core.molecule import Molecule, SurfaceVertex
from linus.core.settings import ModelSettings, SurfaceType


def coulomb_potentials(molecule: Molecule, points: np.ndarray) -> np.ndarray:
    """
    Coulomb potential sum(q / |P - r|) at each point, with the simplified
    charges in e and distances in Angstrom.

    Args:
        molecule: Assembled molecule
        points: (N, 3) or (3,) evaluation points

    Raises:
        GeometryError: if a point coincides with an atom center
    """
    points = np.asarray(points, dtype=float)
    single = points.ndim == 1
    points = np.atleast_2d(points)

    # (N, n_atoms) distances
    distances = np.linalg.norm(points[:, None, :] - molecule.positions[None, :, :], axis=2)
    if np.any(distances == 0):
        point_index, atom_index = np.argwhere(distances == 0)[0]
        raise GeometryError(
            f"Potential evaluated at the center of atom {atom_index} "
            f"({molecule.atoms[atom_index].symbol}) at point {points[point_index]}"
        )

    potentials = (molecule.simplified_charges[None, :] / distances).sum(axis=1)
    return potentials[0] if single else potentials


def coulomb_potential(molecule: Molecule, point) -> float:
    """Coulomb potential at a single point."""
    return float(coulomb_potentials(molecule, np.asarray(point, dtype=float).reshape(3)))


def electrostatic_potential(molecule: Molecule, vertex: SurfaceVertex, settings: ModelSettings) -> float:
    """Potential at a surface vertex under the selected field model."""
    if settings.uses_precomputed_field:
        return vertex.esp_value
    return coulomb_potential(molecule, vertex.position)


def electron_density(molecule: Molecule, vertex: SurfaceVertex, settings: ModelSettings) -> float:
    """
    Electron density at a surface vertex.

    Without precomputed samples there is no density model, so this returns
    the Coulomb potential and relies on the density palette to map it.
    """
    if settings.uses_precomputed_field:
        return vertex.density_value
    return coulomb_potential(molecule, vertex.position)


def surface_values(molecule: Molecule, surface_type: SurfaceType, settings: ModelSettings) -> np.ndarray:
    """
    Field values for every surface vertex, in vertex order.

    Returns an empty array for SurfaceType.NONE or a molecule without a surface.
    """
    surface = molecule.surface
    surface_type = SurfaceType(surface_type)
    if surface_type is SurfaceType.NONE or surface.is_empty:
        return np.zeros(0)

    if settings.uses_precomputed_field:
        if surface_type is SurfaceType.ELECTROSTATIC_POTENTIAL:
            return surface.esp_values
        return surface.density_values

    return np.atleast_1d(coulomb_potentials(molecule, surface.positions))
