"""
Linus - Command Line Entry Point

Exports printable pages of a catalog molecule with its dipoles and surface.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from linus import DEFAULT_DATA_DIR
from linus.core.assembly import load_molecule
from linus.core.catalog import CATALOG, DEFAULT_MOLECULE, MOLECULE_SYMBOLS
from linus.core.colors import surface_palette
from linus.core.dipoles import bond_dipole_magnitude, molecular_dipole
from linus.core.errors import LinusError
from linus.core.export import ExportSettings, create_color_key_page, export_molecule_pdf
from linus.core.settings import (
    BondDipoleModel,
    DipoleDirection,
    FieldModel,
    ModelSettings,
    SurfaceColor,
    SurfaceType,
)
from linus.core.symmetry import central_atom

logger = logging.getLogger(__name__)

SURFACE_CHOICES = {
    "none": SurfaceType.NONE,
    "potential": SurfaceType.ELECTROSTATIC_POTENTIAL,
    "density": SurfaceType.ELECTRON_DENSITY,
}


def parse_args(argv: Optional[Sequence[str]] = None):
    p = argparse.ArgumentParser(description="Linus molecular polarity export")

    p.add_argument("symbol", nargs="?", default=DEFAULT_MOLECULE,
                   help=f"Molecule symbol (default {DEFAULT_MOLECULE})")
    p.add_argument("--list", action="store_true", help="List the catalog and exit")
    p.add_argument("--data-dir", type=Path, default=DEFAULT_DATA_DIR,
                   help="Directory with precomputed <SYMBOL>.json files")

    # -------------------------------------------------------------------------
    # Model
    # -------------------------------------------------------------------------
    p.add_argument("--advanced", action="store_true",
                   help="Use partial-charge models and precomputed fields")
    p.add_argument("--model", choices=[m.value for m in BondDipoleModel],
                   default=BondDipoleModel.HIRSHFELD.value,
                   help="Partial-charge model for bond dipoles (advanced mode)")
    p.add_argument("--field", choices=[m.value for m in FieldModel],
                   default=FieldModel.PSI4.value,
                   help="Field model for surfaces (advanced mode)")
    p.add_argument("--negative-to-positive", action="store_true",
                   help="Draw dipoles from the negative to the positive end")

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    p.add_argument("--surface", choices=list(SURFACE_CHOICES), default="none")
    p.add_argument("--palette", choices=["rwb", "roygb"], default="rwb",
                   help="Electrostatic potential palette")
    p.add_argument("--color-key", action="store_true",
                   help="Also export a color key page for the surface")
    p.add_argument("-o", "--output", type=Path, default=None,
                   help="Output PDF (default <SYMBOL>.pdf)")
    p.add_argument("-v", "--verbose", action="store_true")

    return p.parse_args(argv)


def settings_from_args(args) -> ModelSettings:
    direction = (DipoleDirection.NEGATIVE_TO_POSITIVE if args.negative_to_positive
                 else DipoleDirection.POSITIVE_TO_NEGATIVE)
    return ModelSettings(
        is_advanced=args.advanced,
        bond_dipole_model=BondDipoleModel(args.model),
        field_model=FieldModel(args.field),
        surface_color=SurfaceColor(args.palette.upper()),
        dipole_direction=direction,
    )


def _print_catalog():
    for symbol in MOLECULE_SYMBOLS:
        entry = CATALOG[symbol]
        print(f"{symbol:<6} {entry.full_name:<22} {entry.geometry.value}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Export one molecule; returns the process exit code."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        _print_catalog()
        return 0

    settings = settings_from_args(args)
    try:
        molecule = load_molecule(args.symbol, args.data_dir)
    except LinusError as e:
        logger.error(f"Could not load {args.symbol}: {e}")
        return 1

    model = settings.bond_dipole_model
    if settings.uses_partial_charges and model not in molecule.available_charge_models:
        available = ', '.join(m.value for m in molecule.available_charge_models)
        logger.error(f"{molecule.symbol} has no {model.value} partial charges (available: {available})")
        return 1

    central = central_atom(molecule)
    logger.info(f"{molecule.full_name} ({molecule.symbol}), {molecule.geometry.value}, "
                f"central atom: {central.symbol if central else 'none'}")
    for bond in molecule.bonds:
        logger.info(f"  {bond.atom_a.symbol}{bond.atom_a.index}-{bond.atom_b.symbol}{bond.atom_b.index}: "
                    f"{bond_dipole_magnitude(bond, settings):.3f}")
    logger.info(f"  molecular dipole: {np.linalg.norm(molecular_dipole(molecule, settings)):.3f}")

    surface_type = SURFACE_CHOICES[args.surface]
    if surface_type is not SurfaceType.NONE and molecule.surface.is_empty:
        logger.warning(f"{molecule.symbol} has no surface data in {args.data_dir}, drawing without it")

    output = args.output or Path(f"{molecule.symbol}.pdf")
    try:
        export_molecule_pdf(molecule, output, settings, ExportSettings(surface_type=surface_type))
        palette = surface_palette(surface_type, settings)
        if args.color_key and palette is not None:
            key_path = output.with_name(f"{output.stem}_key.pdf")
            create_color_key_page(palette, key_path)
            logger.info(f"Exported color key to {key_path}")
    except LinusError as e:
        logger.error(f"Export failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
