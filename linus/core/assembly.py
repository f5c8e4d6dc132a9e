"""
Molecule assembly.

Turns raw per-molecule data plus the catalog tables into a centered,
fully linked Molecule:
- resolves elements and simplified partial charges
- applies bond order overrides and pre-reversed bond dipoles
- moves the central atom (or the bond midpoint) to the origin
"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np

from linus import DEFAULT_DATA_DIR
from linus.core.catalog import MOLECULE_SYMBOLS, MoleculeCustomization, get_entry
from linus.core.elements import Element
from linus.core.errors import ConfigurationError
from linus.core.molecule import Atom, Bond, Molecule, Surface, SurfaceVertex
from linus.core.molecule_data import RawMoleculeData, builtin_molecule_data, load_molecule_file
from linus.core.settings import ADVANCED_CHARGE_MODELS, BondDipoleModel
from linus.core.symmetry import find_central_index

logger = logging.getLogger(__name__)


def _pair_key(i: int, j: int) -> frozenset:
    return frozenset((i, j))


def _check_index(index, n_atoms: int, context: str):
    if not isinstance(index, (int, np.integer)) or not 0 <= index < n_atoms:
        raise ConfigurationError(f"{context}: atom index {index!r} out of range for {n_atoms} atoms")


def lookup_simplified_charge(charges: dict, symbol: str, bond_count: int) -> float:
    """
    Simplified charge for an atom, keyed by symbol plus bond count ('O2')
    before the bare symbol ('O').

    Raises:
        ConfigurationError: if neither key is present
    """
    for key in (f"{symbol}{bond_count}", symbol):
        if key in charges:
            return charges[key]
    raise ConfigurationError(f"No simplified charge for {symbol} with {bond_count} bonds")


def _advanced_charges(raw: RawMoleculeData) -> dict:
    """Validated model -> per-atom charge arrays."""
    n_atoms = len(raw.atoms)
    charges = {}
    for name, values in raw.partial_charges.items():
        try:
            model = BondDipoleModel(name)
        except ValueError:
            raise ConfigurationError(f"Unknown partial charge model: {name!r}") from None
        if model not in ADVANCED_CHARGE_MODELS:
            raise ConfigurationError(f"{model.value} charges cannot be supplied with molecule data")
        if len(values) != n_atoms:
            raise ConfigurationError(
                f"{model.value} charges have {len(values)} values for {n_atoms} atoms"
            )
        charges[model] = values
    return charges


def origin_offset(positions: np.ndarray, elements: list[Element], central_index: Optional[int]) -> np.ndarray:
    """Point that becomes the origin of the assembled molecule."""
    if len(elements) == 2 and elements[0] is elements[1]:
        return (positions[0] + positions[1]) / 2.0
    if central_index is None:
        return np.zeros(3)
    return positions[central_index].copy()


def assemble(
    symbol: str,
    raw: RawMoleculeData,
    customization: Optional[MoleculeCustomization] = None,
) -> Molecule:
    """
    Assemble a catalog molecule from its raw data.

    Args:
        symbol: Catalog symbol, e.g. 'H2O'
        raw: Parsed molecule data
        customization: Overrides the catalog customization when given

    Returns:
        Molecule centered on its central atom

    Raises:
        ConfigurationError: on unknown elements, missing charges or bad indices
    """
    entry = get_entry(symbol)
    if customization is None:
        customization = entry.customization

    n_atoms = len(raw.atoms)
    if n_atoms == 0:
        raise ConfigurationError(f"{symbol} has no atoms")

    elements = [Element.from_symbol(a.symbol) for a in raw.atoms]

    for i, j, _ in raw.bonds:
        _check_index(i, n_atoms, f"{symbol} bond")
        _check_index(j, n_atoms, f"{symbol} bond")
        if i == j:
            raise ConfigurationError(f"{symbol} bond joins atom {i} to itself")

    order_overrides = {}
    for (i, j), order in customization.bond_order_overrides.items():
        _check_index(i, n_atoms, f"{symbol} bond order override")
        _check_index(j, n_atoms, f"{symbol} bond order override")
        order_overrides[_pair_key(i, j)] = order

    reversed_pairs = set()
    for i, j in customization.initial_bond_dipoles_reversed:
        _check_index(i, n_atoms, f"{symbol} reversed bond dipole")
        _check_index(j, n_atoms, f"{symbol} reversed bond dipole")
        reversed_pairs.add(_pair_key(i, j))

    incident = [[] for _ in range(n_atoms)]
    for bond_index, (i, j, _) in enumerate(raw.bonds):
        incident[i].append(bond_index)
        incident[j].append(bond_index)
    bond_counts = [len(b) for b in incident]

    positions = np.array([a.position for a in raw.atoms])
    central_index = find_central_index(elements, bond_counts, symbol)
    offset = origin_offset(positions, elements, central_index)
    logger.debug(f"{symbol}: central atom {central_index}, origin offset {offset}")

    advanced = _advanced_charges(raw)

    atoms = []
    for index, element in enumerate(elements):
        atoms.append(Atom(
            index=index,
            element=element,
            simplified_charge=lookup_simplified_charge(
                entry.simplified_charges, element.symbol, bond_counts[index]
            ),
            position=positions[index] - offset,
            advanced_charges={model: float(values[index]) for model, values in advanced.items()},
            bond_indices=tuple(incident[index]),
        ))

    bonds = []
    for bond_index, (i, j, order) in enumerate(raw.bonds):
        key = _pair_key(i, j)
        bonds.append(Bond(
            index=bond_index,
            atom_a=atoms[i],
            atom_b=atoms[j],
            order=order_overrides.get(key, order if order is not None else 1),
            initially_reversed=key in reversed_pairs,
        ))

    vertices = tuple(
        SurfaceVertex(
            position=raw.vertex_positions[k] - offset,
            normal=raw.vertex_normals[k],
            esp_value=float(raw.vertex_esps[k]),
            density_value=float(raw.vertex_densities[k]),
        )
        for k in range(len(raw.vertex_positions))
    )
    surface = Surface(vertices=vertices, faces=tuple(tuple(int(v) for v in f) for f in raw.face_indices))

    return Molecule(
        symbol=symbol,
        full_name=entry.full_name,
        geometry=entry.geometry,
        atoms=tuple(atoms),
        bonds=tuple(bonds),
        surface=surface,
        reference_dipole=raw.molecular_dipole,
        central_index=central_index,
        origin_offset=offset,
    )


def load_molecule(symbol: str, data_dir: Optional[Path] = None) -> Molecule:
    """
    Assemble one catalog molecule.

    Reads <data_dir>/<symbol>.json when it exists, otherwise falls back to
    the built-in geometry (no surface).
    """
    data_dir = Path(data_dir) if data_dir is not None else DEFAULT_DATA_DIR
    path = data_dir / f"{symbol}.json"
    if path.exists():
        raw = load_molecule_file(path)
    else:
        logger.debug(f"No data file for {symbol} in {data_dir}, using built-in geometry")
        raw = builtin_molecule_data(symbol)
    return assemble(symbol, raw)


def load_catalog(data_dir: Optional[Path] = None) -> dict[str, Molecule]:
    """
    Assemble every catalog molecule in display order.

    A molecule that fails to assemble is logged and left out.
    """
    molecules = {}
    for symbol in MOLECULE_SYMBOLS:
        try:
            molecules[symbol] = load_molecule(symbol, data_dir)
        except ConfigurationError as e:
            logger.error(f"Skipping {symbol}: {e}")
    logger.info(f"Loaded {len(molecules)} of {len(MOLECULE_SYMBOLS)} molecules")
    return molecules
