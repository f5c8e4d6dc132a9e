"""
Tests for central atom, partner bond and aligned atom queries.
"""

import numpy as np
import pytest

from linus.core.elements import Element
from linus.core.symmetry import (
    central_atom,
    dimmed_bonds,
    dipole_aligned_atom,
    find_central_index,
    symmetric_partner_bond,
)
from linus.core.settings import ModelSettings

SETTINGS = ModelSettings()


class TestCentralAtom:
    """Test central atom selection."""

    @pytest.mark.parametrize("symbol", ["H2", "N2", "O2", "F2"])
    def test_homonuclear_diatomic(self, molecule, symbol):
        """Homonuclear diatomics have no central atom."""
        assert central_atom(molecule(symbol)) is None

    def test_hf_halogen(self, molecule):
        """HF's central atom is fluorine."""
        assert central_atom(molecule("HF")).element is Element.F

    @pytest.mark.parametrize("symbol, expected", [
        ("H2O", "O"), ("HCN", "C"), ("NH3", "N"), ("BF3", "B"), ("CHCl3", "C"), ("O3", "O"),
    ])
    def test_most_bonds(self, molecule, symbol, expected):
        """The atom with the most bonds is central."""
        assert central_atom(molecule(symbol)).symbol == expected

    def test_tie_breaks_to_first_index(self):
        """Equal bond counts pick the first atom."""
        elements = [Element.C, Element.C, Element.H, Element.H]
        assert find_central_index(elements, [2, 2, 1, 1]) == 0

    def test_matches_assembly(self, all_molecules):
        """The recomputed central atom is the one assembly centered on."""
        for molecule in all_molecules:
            assert central_atom(molecule) is molecule.central_atom


class TestPartnerBond:
    """Test symmetric partner detection."""

    @pytest.mark.parametrize("symbol", ["CH4", "BF3", "CF4", "NH3"])
    def test_no_partner_with_more_than_two(self, molecule, symbol):
        """Three or four equivalent bonds do not pair up."""
        mol = molecule(symbol)
        for bond in mol.bonds:
            assert symmetric_partner_bond(mol, bond) is None

    def test_exactly_two_pair_up(self, molecule):
        """Two equivalent bonds are each other's partner."""
        water = molecule("H2O")
        first, second = water.bonds
        assert symmetric_partner_bond(water, first) is second
        assert symmetric_partner_bond(water, second) is first

    def test_mixed_substituents(self, molecule):
        """CH2F2 pairs its C-H bonds and its C-F bonds separately."""
        mol = molecule("CH2F2")
        cf1, cf2, ch1, ch2 = mol.bonds
        assert symmetric_partner_bond(mol, cf1) is cf2
        assert symmetric_partner_bond(mol, ch2) is ch1

    def test_single_substituent(self, molecule):
        """A unique substituent has no partner."""
        mol = molecule("CH3F")
        assert symmetric_partner_bond(mol, mol.bonds[0]) is None
        mol = molecule("HCN")
        for bond in mol.bonds:
            assert symmetric_partner_bond(mol, bond) is None

    def test_diatomic(self, molecule):
        """Diatomics have no partner bonds."""
        for symbol in ("H2", "HF"):
            mol = molecule(symbol)
            assert symmetric_partner_bond(mol, mol.bonds[0]) is None


class TestAlignedAtom:
    """Test the atom along the molecular dipole arrow."""

    def test_hf_hydrogen_behind_reversed_arrow(self, molecule):
        """Drawn negative to positive, the HF arrow points at the hydrogen."""
        hf = molecule("HF")
        assert dipole_aligned_atom(hf, SETTINGS, orientation_sign=1) is None
        assert dipole_aligned_atom(hf, SETTINGS, orientation_sign=-1).element is Element.H

    def test_fluoromethane(self, molecule):
        """The CH3F arrow lies along the C-F bond."""
        mol = molecule("CH3F")
        aligned = dipole_aligned_atom(mol, SETTINGS, orientation_sign=1)
        assert aligned is not None
        assert aligned.element is Element.F

    def test_water_has_no_aligned_atom(self, molecule):
        """No hydrogen lies within the alignment cone of water's dipole."""
        water = molecule("H2O")
        assert dipole_aligned_atom(water, SETTINGS, 1) is None
        assert dipole_aligned_atom(water, SETTINGS, -1) is None

    def test_nonpolar_molecule(self, molecule):
        """Without a dipole nothing is aligned."""
        assert dipole_aligned_atom(molecule("CH4"), SETTINGS) is None
        assert dipole_aligned_atom(molecule("H2"), SETTINGS) is None

    def test_dimmed_bonds(self, molecule):
        """The bond to the aligned atom is dimmed."""
        hf = molecule("HF")
        assert dimmed_bonds(hf, SETTINGS, -1) == [hf.bonds[0]]
        assert dimmed_bonds(hf, SETTINGS, 1) == []
        assert np.allclose(hf.bonds[0].direction, [-1.0, 0.0, 0.0])
