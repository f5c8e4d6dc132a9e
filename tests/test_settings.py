"""
Tests for model settings and the settings manager.
"""

import dataclasses

import pytest

from linus.core.settings import (
    ADVANCED_CHARGE_MODELS,
    BondDipoleModel,
    DipoleDirection,
    FieldModel,
    ModelSettings,
    SettingsManager,
    SurfaceColor,
)


class TestModelSettings:
    """Test the immutable settings snapshot."""

    def test_defaults(self):
        """Defaults are basic mode with Hirshfeld charges and psi4 fields."""
        settings = ModelSettings()
        assert not settings.is_advanced
        assert settings.bond_dipole_model is BondDipoleModel.HIRSHFELD
        assert settings.field_model is FieldModel.PSI4
        assert settings.surface_color is SurfaceColor.RWB

    def test_frozen(self):
        """Snapshots cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            ModelSettings().is_advanced = True

    def test_partial_charge_mode(self):
        """Partial charges need advanced mode and a charge model."""
        assert not ModelSettings().uses_partial_charges
        assert ModelSettings(is_advanced=True).uses_partial_charges
        electronegativity = ModelSettings(is_advanced=True, bond_dipole_model=BondDipoleModel.ELECTRONEGATIVITY)
        assert not electronegativity.uses_partial_charges

    def test_precomputed_field(self):
        """Precomputed fields need advanced mode and the psi4 field model."""
        assert ModelSettings(is_advanced=True).uses_precomputed_field
        assert not ModelSettings(is_advanced=True, field_model=FieldModel.JAVA).uses_precomputed_field
        assert not ModelSettings().uses_precomputed_field

    def test_advanced_models(self):
        """Data-file charge models exclude electronegativity and the simplified table."""
        assert BondDipoleModel.ELECTRONEGATIVITY not in ADVANCED_CHARGE_MODELS
        assert BondDipoleModel.JAVA not in ADVANCED_CHARGE_MODELS
        assert len(ADVANCED_CHARGE_MODELS) == 6


class TestSettingsManager:
    """Test the single writer of the toggles."""

    @pytest.fixture
    def manager(self):
        """Create a SettingsManager with a recorder attached."""
        manager = SettingsManager(parent=None)
        manager.received = []
        manager.settings_changed.connect(manager.received.append)
        return manager

    def test_initial_settings(self, manager):
        """The manager starts from the defaults."""
        assert manager.settings == ModelSettings()

    def test_change_emits(self, manager):
        """A change is announced with the new snapshot."""
        manager.set_advanced(True)
        assert manager.settings.is_advanced
        assert len(manager.received) == 1
        assert manager.received[0] == manager.settings

    def test_no_change_no_signal(self, manager):
        """Setting the current value is silent."""
        manager.set_surface_color(SurfaceColor.RWB)
        assert manager.received == []

    def test_string_values_accepted(self, manager):
        """Setters accept enum values as strings."""
        manager.set_bond_dipole_model("mulliken")
        manager.set_dipole_direction("negativeToPositive")
        assert manager.settings.bond_dipole_model is BondDipoleModel.MULLIKEN
        assert manager.settings.dipole_direction is DipoleDirection.NEGATIVE_TO_POSITIVE

    def test_old_snapshot_unchanged(self, manager):
        """Earlier snapshots keep their values."""
        before = manager.settings
        manager.set_field_model(FieldModel.JAVA)
        assert before.field_model is FieldModel.PSI4

    def test_reset(self, manager):
        """Reset restores the initial settings."""
        manager.set_advanced(True)
        manager.reset()
        assert manager.settings == ModelSettings()
        assert len(manager.received) == 2
