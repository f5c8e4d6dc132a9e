"""
Raw per-molecule data, as produced by the asset pipeline.

Handles:
- Reading precomputed molecule JSON files (geometry, surface, dipoles, charges)
- Building the same structure from the built-in geometry tables
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from linus.core.catalog import BUILTIN_GEOMETRY
from linus.core.constants import E_ANGSTROM_PER_DEBYE
from linus.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class RawAtom:
    """Atom as listed in the data file, before assembly."""
    symbol: str
    x: float  # Angstrom
    y: float
    z: float

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass
class RawMoleculeData:
    """Parsed but unassembled molecule data."""
    atoms: list[RawAtom]
    bonds: list[tuple[int, int, float]]  # 0-based atom indices and bond order
    molecular_dipole: np.ndarray  # (3,) ab-initio dipole, Debye
    vertex_positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    vertex_normals: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    face_indices: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=int))
    vertex_esps: np.ndarray = field(default_factory=lambda: np.zeros(0))
    vertex_densities: np.ndarray = field(default_factory=lambda: np.zeros(0))
    partial_charges: dict = field(default_factory=dict)  # model name -> list of charges

    @property
    def has_surface(self) -> bool:
        return len(self.vertex_positions) > 0


def _vector_array(values, name: str) -> np.ndarray:
    """Flat [x0, y0, z0, x1, ...] list or nested [[x, y, z], ...] list to (N, 3)."""
    array = np.asarray(values, dtype=float)
    if array.size == 0:
        return np.zeros((0, 3))
    if array.ndim == 1:
        if array.size % 3 != 0:
            raise ConfigurationError(f"{name} length {array.size} is not a multiple of 3")
        array = array.reshape(-1, 3)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ConfigurationError(f"{name} must hold 3-component vectors, got shape {array.shape}")
    return array


def parse_molecule_json(payload: dict) -> RawMoleculeData:
    """
    Convert a decoded molecule JSON document into RawMoleculeData.

    Expected keys: atoms ([{symbol, x, y, z}]), bonds ([[i, j]] or
    [[i, j, order]], 0-based), molecularDipole, vertexPositions,
    vertexNormals, faceIndices, vertexESPs, vertexDTs and optionally
    partialCharges ({model: [charge per atom]}).

    Raises:
        ConfigurationError: if required keys are missing or malformed
    """
    try:
        atoms = [
            RawAtom(str(a['symbol']), float(a['x']), float(a['y']), float(a['z']))
            for a in payload['atoms']
        ]
        bonds = []
        for entry in payload.get('bonds', []):
            order = float(entry[2]) if len(entry) > 2 else 1
            bonds.append((int(entry[0]), int(entry[1]), order))
        dipole = np.asarray(payload.get('molecularDipole', [0.0, 0.0, 0.0]), dtype=float)
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise ConfigurationError(f"Malformed molecule data: {e}") from e

    if dipole.shape != (3,):
        raise ConfigurationError(f"molecularDipole must have 3 components, got {dipole.shape}")

    positions = _vector_array(payload.get('vertexPositions', []), 'vertexPositions')
    normals = _vector_array(payload.get('vertexNormals', []), 'vertexNormals')
    faces = np.asarray(payload.get('faceIndices', []), dtype=int).reshape(-1, 3)
    esps = np.asarray(payload.get('vertexESPs', []), dtype=float)
    densities = np.asarray(payload.get('vertexDTs', []), dtype=float)

    n_vertices = len(positions)
    for name, values in (('vertexNormals', normals), ('vertexESPs', esps), ('vertexDTs', densities)):
        if len(values) != n_vertices:
            raise ConfigurationError(
                f"{name} has {len(values)} entries for {n_vertices} surface vertices"
            )
    if faces.size and (faces.min() < 0 or faces.max() >= n_vertices):
        raise ConfigurationError("faceIndices reference vertices outside the surface")

    partial_charges = {
        str(model): [float(q) for q in charges]
        for model, charges in payload.get('partialCharges', {}).items()
    }

    return RawMoleculeData(
        atoms=atoms,
        bonds=bonds,
        molecular_dipole=dipole,
        vertex_positions=positions,
        vertex_normals=normals,
        face_indices=faces,
        vertex_esps=esps,
        vertex_densities=densities,
        partial_charges=partial_charges,
    )


def load_molecule_file(path: Path) -> RawMoleculeData:
    """
    Read a precomputed molecule JSON file.

    Raises:
        ConfigurationError: if the file cannot be decoded
    """
    path = Path(path)
    try:
        with open(path, encoding='utf-8') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path.name}: {e}") from e

    logger.debug(f"Read molecule data from {path}")
    return parse_molecule_json(payload)


def point_charge_dipole(positions: np.ndarray, charges: np.ndarray) -> np.ndarray:
    """
    Dipole of a set of point charges in Debye (positions in Angstrom).

    Physics convention (negative to positive), the same as the ab-initio
    dipoles in the data files.
    """
    return (np.asarray(charges)[:, None] * np.asarray(positions)).sum(axis=0) / E_ANGSTROM_PER_DEBYE


def builtin_molecule_data(symbol: str) -> RawMoleculeData:
    """
    Raw data for a catalog molecule from the built-in geometry tables.

    The built-in data has no surface. Its reference dipole is the point-charge
    dipole of the tabulated charges.

    Raises:
        ConfigurationError: if the molecule has no built-in geometry
    """
    try:
        atom_rows, bond_rows = BUILTIN_GEOMETRY[symbol]
    except KeyError:
        raise ConfigurationError(f"No built-in geometry for {symbol!r}") from None

    atoms = [RawAtom(s, x, y, z) for s, x, y, z, _ in atom_rows]
    positions = np.array([[x, y, z] for _, x, y, z, _ in atom_rows])
    charges = np.array([q for *_, q in atom_rows])

    return RawMoleculeData(
        atoms=atoms,
        bonds=[(i, j, order) for i, j, order in bond_rows],
        molecular_dipole=point_charge_dipole(positions, charges),
    )
