"""
Shared fixtures: catalog molecules from the built-in tables and a water
molecule with a small synthetic surface and advanced charges.
"""

import matplotlib
matplotlib.use("Agg")

import pytest

from linus.core.assembly import assemble
from linus.core.catalog import MOLECULE_SYMBOLS
from linus.core.molecule_data import builtin_molecule_data, parse_molecule_json


def build(symbol, customization=None):
    """Assemble a catalog molecule from its built-in geometry."""
    return assemble(symbol, builtin_molecule_data(symbol), customization)


@pytest.fixture
def molecule():
    """Factory fixture: molecule('HF') -> assembled built-in molecule."""
    return build


@pytest.fixture
def all_molecules():
    """Every catalog molecule, in display order."""
    return [build(symbol) for symbol in MOLECULE_SYMBOLS]


@pytest.fixture
def water_payload():
    """Decoded JSON document for water with a four-vertex surface."""
    return {
        "atoms": [
            {"symbol": "H", "x": 0.761229899, "y": -0.478138566, "z": 0.0},
            {"symbol": "O", "x": 0.0, "y": 0.120865773, "z": 0.0},
            {"symbol": "H", "x": -0.761229899, "y": -0.478138566, "z": 0.0},
        ],
        "bonds": [[0, 1], [1, 2]],
        "molecularDipole": [0.0, -1.85, 0.0],
        "vertexPositions": [
            0.0, 2.0, 0.0,
            2.0, 0.0, 0.0,
            -2.0, 0.0, 0.0,
            0.0, -2.0, 1.0,
        ],
        "vertexNormals": [
            0.0, 1.0, 0.0,
            1.0, 0.0, 0.0,
            -1.0, 0.0, 0.0,
            0.0, -1.0, 0.0,
        ],
        "faceIndices": [[0, 1, 2], [1, 2, 3]],
        "vertexESPs": [-0.05, 0.01, 0.01, 0.04],
        "vertexDTs": [0.001, 0.002, 0.002, 0.0005],
        "partialCharges": {
            "hirshfeld": [0.17, -0.34, 0.17],
            "mulliken": [0.33, -0.66, 0.33],
        },
    }


@pytest.fixture
def water(water_payload):
    """Water assembled from the synthetic JSON payload."""
    return assemble("H2O", parse_molecule_json(water_payload))
