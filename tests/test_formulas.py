"""
Tests for the ETTV/RETV index formulas.

Run with: pytest tests/test_formulas.py -v
"""

import dataclasses

import pytest

from facadeflux.analysis.formulas import (
    DEFAULT_COEFFICIENTS,
    ETTV_COEFFICIENTS,
    RETV_COEFFICIENTS,
    IndexCoefficients,
    evaluate_index,
    index_terms,
    resolve_coefficients,
)
from facadeflux.core.config import CalculationOptions, IndexType, Settings


class TestCoefficients:
    """Tests for standard and overridden coefficients."""

    def test_ettv_defaults(self):
        """Test the ETTV coefficient set."""
        assert ETTV_COEFFICIENTS == IndexCoefficients(12.0, 3.4, 211.0)

    def test_retv_defaults(self):
        """Test the RETV coefficient set."""
        assert RETV_COEFFICIENTS == IndexCoefficients(3.4, 1.3, 58.6)

    def test_default_lookup(self):
        """Test coefficients keyed by index type."""
        assert DEFAULT_COEFFICIENTS[IndexType.ETTV] is ETTV_COEFFICIENTS
        assert DEFAULT_COEFFICIENTS[IndexType.RETV] is RETV_COEFFICIENTS

    def test_resolve_without_options(self):
        """Test that no options resolves to the default index coefficients."""
        config = Settings(default_index=IndexType.ETTV)
        assert resolve_coefficients(config=config) == ETTV_COEFFICIENTS

    def test_resolve_retv(self):
        """Test resolving the RETV set."""
        options = CalculationOptions(index=IndexType.RETV)
        assert resolve_coefficients(options) == RETV_COEFFICIENTS

    def test_resolve_with_override(self):
        """Test that overrides only change the named coefficient."""
        options = CalculationOptions(index=IndexType.ETTV, wall_conductance_coefficient=15.0)
        coefficients = resolve_coefficients(options)
        assert coefficients.wall_conductance == 15.0
        assert coefficients.fenestration_conductance == 3.4
        assert coefficients.solar_gain == 211.0
        assert ETTV_COEFFICIENTS.wall_conductance == 12.0

    def test_coefficients_are_frozen(self):
        """Test that the standard sets cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            ETTV_COEFFICIENTS.solar_gain = 0.0


class TestIndexFormula:
    """Tests for index evaluation."""

    def test_reference_terms(self):
        """Test the three terms of the north wall/window reference case."""
        terms = index_terms(ETTV_COEFFICIENTS, wwr=1 / 3, wall_u=0.5, fenestration_u=2.0, sc=0.6, cf=0.80)
        assert terms.opaque_conduction == pytest.approx(4.0)
        assert terms.fenestration_conduction == pytest.approx(2.2667, abs=1e-4)
        assert terms.solar_gain == pytest.approx(33.76)
        assert terms.total == pytest.approx(40.03, abs=0.01)

    def test_evaluate_index(self):
        """Test the scalar index value."""
        value = evaluate_index(ETTV_COEFFICIENTS, 1 / 3, 0.5, 2.0, 0.6, 0.80)
        assert value == pytest.approx(40.03, abs=0.01)

    def test_all_wall(self):
        """Test that WWR = 0 leaves only the wall conduction term."""
        value = evaluate_index(ETTV_COEFFICIENTS, 0.0, 0.5, 2.0, 0.6, 0.80)
        assert value == pytest.approx(6.0)

    def test_all_glass(self):
        """Test that WWR = 1 drops the wall term."""
        terms = index_terms(ETTV_COEFFICIENTS, 1.0, 0.5, 2.0, 0.6, 1.0)
        assert terms.opaque_conduction == 0.0
        assert terms.total == pytest.approx(3.4 * 2.0 + 211 * 0.6)

    def test_retv_reference(self):
        """Test the reference case with RETV coefficients."""
        value = evaluate_index(RETV_COEFFICIENTS, 1 / 3, 0.5, 2.0, 0.6, 0.80)
        expected = 3.4 * (2 / 3) * 0.5 + 1.3 * (1 / 3) * 2.0 + 58.6 * (1 / 3) * 0.6 * 0.80
        assert value == pytest.approx(expected)

    def test_terms_to_dict(self):
        """Test term serialization."""
        terms = index_terms(ETTV_COEFFICIENTS, 0.5, 1.0, 1.0, 1.0, 1.0)
        assert set(terms.to_dict()) == {"opaque_conduction", "fenestration_conduction", "solar_gain"}
