"""
Static figure and PDF export.

Draws a molecule with its bonds, dipole arrows and colored surface as a
printable page, plus a color key page for the surface palettes.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.cm import ScalarMappable
from matplotlib.colors import Normalize
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from linus.core.colors import (
    PALETTE_RANGES,
    SurfacePalette,
    element_color,
    element_foreground_color,
    palette_colormap,
    surface_colors,
)
from linus.core.constants import (
    BOND_COLOR,
    BOND_DIPOLE_COLOR,
    MOLECULAR_DIPOLE_COLOR,
    SURFACE_ALPHA,
    PAGE_SIZE_A5,
    DEFAULT_ELEVATION,
    DEFAULT_AZIMUTH,
)
from linus.core.dipoles import molecular_dipole
from linus.core.molecule import Molecule
from linus.core.placement import bond_cylinder_offsets, place_bond_dipole, place_molecular_dipole
from linus.core.settings import ModelSettings, SurfaceType
from linus.core.symmetry import dimmed_bonds

logger = logging.getLogger(__name__)

# Distance of the virtual camera from the origin (Angstrom)
CAMERA_DISTANCE = 20.0


@dataclass
class ExportSettings:
    """Settings for figure export."""
    surface_type: SurfaceType = SurfaceType.NONE
    page_size: tuple[float, float] = PAGE_SIZE_A5
    elevation: float = DEFAULT_ELEVATION  # degrees
    azimuth: float = DEFAULT_AZIMUTH
    show_bond_dipoles: bool = True
    show_molecular_dipole: bool = True
    show_labels: bool = True


def camera_position(elevation: float, azimuth: float, distance: float = CAMERA_DISTANCE) -> np.ndarray:
    """Camera position for a matplotlib 3D view angle."""
    el = np.radians(elevation)
    az = np.radians(azimuth)
    return distance * np.array([np.cos(el) * np.cos(az), np.cos(el) * np.sin(az), np.sin(el)])


def _draw_surface(ax, molecule: Molecule, model_settings: ModelSettings, surface_type: SurfaceType):
    colors = surface_colors(molecule, surface_type, model_settings)
    surface = molecule.surface
    if len(colors) == 0 or not surface.faces:
        return

    faces = np.asarray(surface.faces)
    positions = surface.positions
    verts = positions[faces]  # (n_faces, 3, 3)
    face_colors = colors[faces].mean(axis=1)

    poly = Poly3DCollection(verts, facecolors=face_colors, alpha=SURFACE_ALPHA, linewidth=0)
    ax.add_collection3d(poly)


def render_molecule_figure(
    molecule: Molecule,
    model_settings: Optional[ModelSettings] = None,
    export_settings: Optional[ExportSettings] = None,
):
    """
    Draw a molecule on a 3D matplotlib figure.

    Args:
        molecule: Assembled molecule
        model_settings: Model toggles (defaults if omitted)
        export_settings: Page and view settings

    Returns:
        The matplotlib Figure; the caller closes it
    """
    model_settings = model_settings or ModelSettings()
    export_settings = export_settings or ExportSettings()
    view_point = camera_position(export_settings.elevation, export_settings.azimuth)

    fig = plt.figure(figsize=export_settings.page_size)
    fig.patch.set_facecolor('white')
    ax = fig.add_subplot(111, projection='3d')
    try:
        _draw_molecule(ax, molecule, model_settings, export_settings, view_point)
    except Exception:
        plt.close(fig)
        raise

    return fig


def _draw_molecule(ax, molecule, model_settings, export_settings, view_point):
    dimmed = {b.index for b in dimmed_bonds(molecule, model_settings, model_settings.orientation_sign)}

    # Bonds
    for bond in molecule.bonds:
        start = bond.atom_a.position
        end = bond.atom_b.position
        alpha = 0.5 if bond.index in dimmed else 1.0
        for offset in bond_cylinder_offsets(molecule, bond, view_point):
            line = np.array([start + offset, end + offset])
            ax.plot(line[:, 0], line[:, 1], line[:, 2], color=BOND_COLOR, linewidth=3, alpha=alpha)

    # Atoms
    positions = molecule.positions
    sizes = [2000 * a.display_radius ** 2 for a in molecule.atoms]
    ax.scatter(positions[:, 0], positions[:, 1], positions[:, 2],
               s=sizes, c=[element_color(a.element) for a in molecule.atoms],
               edgecolors='black', linewidths=0.5, depthshade=False)
    if export_settings.show_labels:
        for atom in molecule.atoms:
            ax.text(*atom.position, atom.symbol, fontsize=8, ha='center', va='center',
                    color=element_foreground_color(atom.element))

    if export_settings.show_bond_dipoles:
        for bond in molecule.bonds:
            placement, _ = place_bond_dipole(molecule, bond, model_settings, view_point)
            vector = placement.direction * placement.length
            ax.quiver(*placement.tail, *vector, color=BOND_DIPOLE_COLOR,
                      arrow_length_ratio=0.2, linewidth=1.5)

    if export_settings.show_molecular_dipole:
        placement = place_molecular_dipole(molecule, model_settings)
        if placement is not None:
            vector = placement.direction * placement.length
            ax.quiver(*placement.tail, *vector, color=MOLECULAR_DIPOLE_COLOR,
                      arrow_length_ratio=0.2, linewidth=3)

    _draw_surface(ax, molecule, model_settings, SurfaceType(export_settings.surface_type))

    # Equal aspect around the molecule
    limit = max(1.0, float(np.abs(positions).max()) + 1.0)
    ax.set_xlim(-limit, limit)
    ax.set_ylim(-limit, limit)
    ax.set_zlim(-limit, limit)
    ax.set_box_aspect([1, 1, 1])
    ax.view_init(elev=export_settings.elevation, azim=export_settings.azimuth)
    ax.axis('off')

    dipole = float(np.linalg.norm(molecular_dipole(molecule, model_settings)))
    ax.text2D(0.02, 0.98, f"{molecule.full_name} ({molecule.symbol})",
              transform=ax.transAxes, fontsize=10, va='top')
    ax.text2D(0.02, 0.02, f"Molecular dipole: {dipole:.2f} D",
              transform=ax.transAxes, fontsize=8, va='bottom', color='gray')


def export_molecule_pdf(
    molecule: Molecule,
    output_path: Path,
    model_settings: Optional[ModelSettings] = None,
    export_settings: Optional[ExportSettings] = None,
) -> Path:
    """Render a molecule and save it as a single-page PDF."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig = render_molecule_figure(molecule, model_settings, export_settings)
    fig.savefig(output_path, format='pdf', bbox_inches='tight')
    plt.close(fig)

    logger.info(f"Exported {molecule.symbol} to {output_path}")
    return output_path


# Title and labels for the low and high ends of each palette
_KEY_LABELS = {
    SurfacePalette.RWB: ("Electrostatic potential", "negative", "positive"),
    SurfacePalette.ROYGB: ("Electrostatic potential", "negative", "positive"),
    SurfacePalette.DENSITY_ADVANCED: ("Electron density", "less", "more"),
    SurfacePalette.DENSITY_SIMPLIFIED: ("Electron density", "more", "less"),
}


def create_color_key_page(
    palette: SurfacePalette,
    output_path: Path,
    page_size: tuple[float, float] = PAGE_SIZE_A5,
) -> Path:
    """Create a page with a labeled color bar for a surface palette."""
    palette = SurfacePalette(palette)
    title, low_label, high_label = _KEY_LABELS[palette]
    vmin, vmax = PALETTE_RANGES[palette]

    fig, ax = plt.subplots(figsize=(page_size[0], 1.2))
    fig.patch.set_facecolor('white')

    mappable = ScalarMappable(norm=Normalize(vmin=vmin, vmax=vmax), cmap=palette_colormap(palette))
    colorbar = fig.colorbar(mappable, cax=ax, orientation='horizontal')
    colorbar.set_ticks([vmin, vmax])
    colorbar.set_ticklabels([low_label, high_label])
    ax.set_title(title, fontsize=10)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, format='pdf', bbox_inches='tight')
    plt.close(fig)
    return output_path
