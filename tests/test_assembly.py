"""
Tests for molecule assembly and data loading.

Validates:
- Centering on the central atom or bond midpoint
- Simplified charge lookup and customization
- JSON parsing and surface handling
- Configuration errors for bad data
"""

import json

import numpy as np
import pytest

from linus.core.assembly import assemble, load_catalog, load_molecule, lookup_simplified_charge
from linus.core.catalog import MOLECULE_SYMBOLS, MoleculeCustomization, BUILTIN_GEOMETRY
from linus.core.elements import Element
from linus.core.errors import ConfigurationError
from linus.core.molecule import MolecularGeometry
from linus.core.molecule_data import (
    RawAtom,
    RawMoleculeData,
    builtin_molecule_data,
    load_molecule_file,
    parse_molecule_json,
)
from linus.core.settings import BondDipoleModel


class TestCatalog:
    """Test the built-in catalog tables."""

    def test_nineteen_molecules(self):
        """Verify the catalog holds 19 molecules with built-in geometry."""
        assert len(MOLECULE_SYMBOLS) == 19
        assert set(MOLECULE_SYMBOLS) == set(BUILTIN_GEOMETRY)

    def test_all_molecules_assemble(self, all_molecules):
        """Every catalog molecule assembles and keeps its display order."""
        assert [m.symbol for m in all_molecules] == MOLECULE_SYMBOLS

    def test_geometry_classes(self, molecule):
        """Spot check geometry classification."""
        assert molecule("CO2").geometry is MolecularGeometry.LINEAR
        assert molecule("H2O").geometry is MolecularGeometry.BENT
        assert molecule("NH3").geometry is MolecularGeometry.TRIGONAL_PYRAMIDAL
        assert molecule("CHCl3").geometry is MolecularGeometry.TETRAHEDRAL


class TestCentering:
    """Test origin offset selection."""

    def test_homonuclear_diatomic_midpoint(self, molecule):
        """H2 is centered on its bond midpoint and has no central atom."""
        h2 = molecule("H2")
        assert h2.central_atom is None
        assert np.allclose(h2.atoms[0].position, -h2.atoms[1].position)

    def test_hf_centered_on_fluorine(self, molecule):
        """HF is centered on the halogen."""
        hf = molecule("HF")
        assert hf.central_atom.element is Element.F
        assert np.allclose(hf.central_atom.position, 0.0)
        assert np.allclose(hf.origin_offset, [0.088719117, 0.0, 0.0])

    def test_water_centered_on_oxygen(self, molecule):
        """The atom with the most bonds moves to the origin."""
        water = molecule("H2O")
        assert water.central_atom.symbol == "O"
        assert np.allclose(water.central_atom.position, 0.0)

    def test_heteronuclear_diatomic_without_halogen(self, caplog):
        """A non-halogen heteronuclear diatomic stays uncentered with a warning."""
        # CN fragment, using the HCN charge table
        raw = RawMoleculeData(
            atoms=[RawAtom("C", 0.5, 0.0, 0.0), RawAtom("N", -0.6, 0.0, 0.0)],
            bonds=[(0, 1, 3)],
            molecular_dipole=np.zeros(3),
        )
        fragment = assemble("HCN", raw)
        assert fragment.central_atom is None
        assert np.allclose(fragment.origin_offset, 0.0)
        assert np.allclose(fragment.atoms[0].position, [0.5, 0.0, 0.0])
        assert "no halogen" in caplog.text

    def test_surface_shifted_with_atoms(self, water, water_payload):
        """Surface vertices move by the same offset as the atoms."""
        original = np.array(water_payload["vertexPositions"]).reshape(-1, 3)
        assert np.allclose(water.surface.positions, original - water.origin_offset)


class TestCharges:
    """Test simplified and advanced charges."""

    def test_ozone_charges_by_bond_count(self, molecule):
        """Central and terminal ozone oxygens get different charges."""
        ozone = molecule("O3")
        assert ozone.atoms[0].simplified_charge == pytest.approx(0.242265)
        assert ozone.atoms[1].simplified_charge == pytest.approx(-0.121133)
        assert ozone.atoms[2].simplified_charge == pytest.approx(-0.121133)

    def test_lookup_prefers_bond_count(self):
        """Symbol plus bond count wins over the bare symbol."""
        charges = {"O": 1.0, "O2": 2.0}
        assert lookup_simplified_charge(charges, "O", 2) == 2.0
        assert lookup_simplified_charge(charges, "O", 1) == 1.0

    def test_lookup_missing_raises(self):
        """A missing entry is a configuration error."""
        with pytest.raises(ConfigurationError):
            lookup_simplified_charge({"H": 0.1}, "O", 2)

    def test_advanced_charges(self, water):
        """Advanced charges are attached per atom."""
        oxygen = water.central_atom
        assert oxygen.partial_charge(BondDipoleModel.HIRSHFELD) == pytest.approx(-0.34)
        assert oxygen.partial_charge(BondDipoleModel.MULLIKEN) == pytest.approx(-0.66)
        assert oxygen.partial_charge(BondDipoleModel.JAVA) == pytest.approx(-0.752569)

    def test_missing_model_raises(self, water):
        """Asking for a model without data raises."""
        with pytest.raises(ConfigurationError):
            water.atoms[0].partial_charge(BondDipoleModel.CHELPG)

    def test_available_models(self, water, molecule):
        """Only models with a value for every atom are available."""
        models = water.available_charge_models
        assert BondDipoleModel.HIRSHFELD in models
        assert BondDipoleModel.MULLIKEN in models
        assert BondDipoleModel.MBIS not in models
        assert molecule("H2O").available_charge_models == [
            BondDipoleModel.ELECTRONEGATIVITY, BondDipoleModel.JAVA,
        ]


class TestCustomization:
    """Test bond order overrides and reversed bond dipoles."""

    def test_ozone_resonance_bonds(self, molecule):
        """Ozone bonds are drawn as 1.5 bonds."""
        assert [b.order for b in molecule("O3").bonds] == [1.5, 1.5]

    def test_raw_bond_orders_kept(self, molecule):
        """Bond orders from the data survive assembly."""
        assert [b.order for b in molecule("HCN").bonds] == [3, 1]
        assert [b.order for b in molecule("CO2").bonds] == [2, 2]

    def test_reversed_pair_is_order_independent(self, molecule):
        """A reversed pair matches the bond whichever way it is written."""
        ammonia = molecule("NH3")
        assert ammonia.bonds[0].initially_reversed
        assert not ammonia.bonds[1].initially_reversed

        flipped = molecule("NH3", MoleculeCustomization(initial_bond_dipoles_reversed=((1, 0),)))
        assert flipped.bonds[0].initially_reversed

    def test_customization_index_out_of_range(self, molecule):
        """Customization indices must refer to existing atoms."""
        with pytest.raises(ConfigurationError):
            molecule("HF", MoleculeCustomization(initial_bond_dipoles_reversed=((0, 5),)))

    def test_incident_bonds(self, molecule):
        """Atoms know the indices of their bonds."""
        methane = molecule("CH4")
        assert methane.central_atom.bond_indices == (0, 1, 2, 3)
        for atom in methane.atoms[1:]:
            assert atom.bond_count == 1


class TestDataErrors:
    """Test configuration errors for malformed data."""

    def test_unknown_element(self):
        """An element outside the supported set aborts assembly."""
        raw = RawMoleculeData(
            atoms=[RawAtom("S", 0.0, 0.0, 0.0), RawAtom("H", 1.3, 0.0, 0.0)],
            bonds=[(0, 1, 1)],
            molecular_dipole=np.zeros(3),
        )
        with pytest.raises(ConfigurationError):
            assemble("HF", raw)

    def test_bond_index_out_of_range(self):
        """Bond endpoints must be valid atom indices."""
        raw = builtin_molecule_data("HF")
        raw.bonds = [(0, 2, 1)]
        with pytest.raises(ConfigurationError):
            assemble("HF", raw)

    def test_charge_count_mismatch(self, water_payload):
        """Advanced charge arrays need one value per atom."""
        water_payload["partialCharges"]["mbis"] = [0.1, -0.1]
        with pytest.raises(ConfigurationError):
            assemble("H2O", parse_molecule_json(water_payload))

    def test_unknown_charge_model(self, water_payload):
        """Unknown charge model names are rejected."""
        water_payload["partialCharges"]["gasteiger"] = [0.1, -0.2, 0.1]
        with pytest.raises(ConfigurationError):
            assemble("H2O", parse_molecule_json(water_payload))

    def test_unknown_molecule(self):
        """Symbols outside the catalog are rejected."""
        with pytest.raises(ConfigurationError):
            assemble("C6H6", builtin_molecule_data("HF"))

    def test_missing_atoms_key(self):
        """A payload without atoms is malformed."""
        with pytest.raises(ConfigurationError):
            parse_molecule_json({"bonds": []})

    def test_surface_length_mismatch(self, water_payload):
        """Per-vertex arrays must match the vertex count."""
        water_payload["vertexESPs"] = [0.0]
        with pytest.raises(ConfigurationError):
            parse_molecule_json(water_payload)


class TestLoading:
    """Test loading from a data directory."""

    def test_builtin_fallback(self, tmp_path):
        """Without a data file the built-in geometry is used."""
        hf = load_molecule("HF", tmp_path)
        assert hf.surface.is_empty
        assert hf.atom_count == 2

    def test_load_json_file(self, tmp_path, water_payload):
        """A data file replaces the built-in geometry."""
        (tmp_path / "H2O.json").write_text(json.dumps(water_payload))
        water = load_molecule("H2O", tmp_path)
        assert len(water.surface) == 4
        assert water.surface.faces == ((0, 1, 2), (1, 2, 3))
        assert np.allclose(water.reference_dipole, [0.0, -1.85, 0.0])

    def test_invalid_json(self, tmp_path):
        """Undecodable files raise a configuration error."""
        path = tmp_path / "HF.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            load_molecule_file(path)

    def test_catalog_skips_broken_molecule(self, tmp_path, caplog):
        """A broken data file drops only that molecule."""
        (tmp_path / "HF.json").write_text("{not json")
        molecules = load_catalog(tmp_path)
        assert len(molecules) == 18
        assert "HF" not in molecules
        assert "Skipping HF" in caplog.text

    def test_builtin_reference_dipole(self):
        """Built-in data carries the point-charge dipole of its charges."""
        raw = builtin_molecule_data("H2")
        assert np.allclose(raw.molecular_dipole, 0.0)
        assert not raw.has_surface
