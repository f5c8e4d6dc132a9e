"""
Model settings shared by every derived computation.

The toggles (advanced mode, partial-charge model, field model, surface
palette, dipole direction) are owned by a single SettingsManager. Derived
computations never read them from a global: they receive an immutable
ModelSettings snapshot, so the same molecule can be evaluated under several
settings side by side.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal


class BondDipoleModel(str, Enum):
    """How bond dipoles are derived."""
    ELECTRONEGATIVITY = "electronegativity"
    PSI4 = "psi4"
    JAVA = "java"  # the small hand-curated (simplified) charge table
    MULLIKEN = "mulliken"
    LOEWDIN = "loewdin"
    HIRSHFELD = "hirshfeld"
    MBIS = "mbis"
    CHELPG = "chelpg"


# Models whose charges come with the precomputed molecule data
ADVANCED_CHARGE_MODELS = tuple(
    m for m in BondDipoleModel
    if m not in (BondDipoleModel.ELECTRONEGATIVITY, BondDipoleModel.JAVA)
)


class FieldModel(str, Enum):
    """Source of electrostatic potential and electron density values."""
    # Independently computed by psi4 and sampled at every surface vertex
    PSI4 = "psi4"
    # Partial charges only, potential and density share the same values
    JAVA = "java"


class SurfaceType(str, Enum):
    NONE = "none"
    ELECTROSTATIC_POTENTIAL = "electrostaticPotential"
    ELECTRON_DENSITY = "electronDensity"


class SurfaceColor(str, Enum):
    """Palette for electrostatic potential surfaces."""
    RWB = "RWB"
    ROYGB = "ROYGB"


class DipoleDirection(str, Enum):
    POSITIVE_TO_NEGATIVE = "positiveToNegative"
    NEGATIVE_TO_POSITIVE = "negativeToPositive"


@dataclass(frozen=True)
class ModelSettings:
    """Snapshot of the user-selected model toggles."""
    is_advanced: bool = False
    bond_dipole_model: BondDipoleModel = BondDipoleModel.HIRSHFELD
    field_model: FieldModel = FieldModel.PSI4
    surface_color: SurfaceColor = SurfaceColor.RWB
    dipole_direction: DipoleDirection = DipoleDirection.POSITIVE_TO_NEGATIVE

    @property
    def uses_partial_charges(self) -> bool:
        """True when bond dipoles come from partial charges, False for electronegativity."""
        return self.is_advanced and self.bond_dipole_model is not BondDipoleModel.ELECTRONEGATIVITY

    @property
    def uses_precomputed_field(self) -> bool:
        """True when surface values are read from the precomputed samples."""
        return self.is_advanced and self.field_model is FieldModel.PSI4

    @property
    def orientation_sign(self) -> int:
        """+1 when dipoles point positive to negative, -1 for the reverse convention."""
        if self.dipole_direction is DipoleDirection.NEGATIVE_TO_POSITIVE:
            return -1
        return 1


class SettingsManager(QObject):
    """
    Owns the mutable model toggles and announces every change.

    This is the single writer for the toggles. Views connect to
    settings_changed and re-run their derivations with the new snapshot.

    Signals:
        settings_changed: Emitted with the new ModelSettings after a change
    """

    settings_changed = pyqtSignal(object)  # ModelSettings

    def __init__(self, settings: Optional[ModelSettings] = None, parent=None):
        super().__init__(parent)
        self._initial = settings or ModelSettings()
        self._settings = self._initial

    @property
    def settings(self) -> ModelSettings:
        """Current settings snapshot."""
        return self._settings

    def update(self, **changes):
        """
        Replace one or more toggles.

        Args:
            **changes: ModelSettings field names and their new values
        """
        new_settings = replace(self._settings, **changes)
        if new_settings != self._settings:
            self._settings = new_settings
            self.settings_changed.emit(new_settings)

    def set_advanced(self, is_advanced: bool):
        self.update(is_advanced=is_advanced)

    def set_bond_dipole_model(self, model: BondDipoleModel):
        self.update(bond_dipole_model=BondDipoleModel(model))

    def set_field_model(self, model: FieldModel):
        self.update(field_model=FieldModel(model))

    def set_surface_color(self, color: SurfaceColor):
        self.update(surface_color=SurfaceColor(color))

    def set_dipole_direction(self, direction: DipoleDirection):
        self.update(dipole_direction=DipoleDirection(direction))

    def reset(self):
        """Restore the settings the manager was created with."""
        if self._settings != self._initial:
            self._settings = self._initial
            self.settings_changed.emit(self._initial)
