"""
Linus - Molecular Polarity Teaching Tool

Honoring Linus Pauling's work on electronegativity and the chemical bond.
"""

from pathlib import Path

__version__ = "0.3.0"


def _base_dir() -> Path:
    """Project root, where the optional precomputed data directory lives."""
    return Path(__file__).parent.parent


DEFAULT_DATA_DIR = _base_dir() / "data" / "molecules"
