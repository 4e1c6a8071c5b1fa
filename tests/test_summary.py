"""
Tests for text summaries.

Covers:
- Number formatting
- Orientation blocks with construction tables
- Model summary and construction summary
- Empty results
"""

import pytest

from facadeflux.analysis.aggregation import aggregate_orientation
from facadeflux.analysis.envelope_calculator import EnvelopeCalculator, calculate_ettv
from facadeflux.analysis.formulas import ETTV_COEFFICIENTS, RETV_COEFFICIENTS
from facadeflux.analysis.u_value_calculator import RSE_BCA_TABLE, opaque_from_layers
from facadeflux.core.config import IndexType, settings
from facadeflux.core.constructions import Material, OpaqueConstruction
from facadeflux.core.models import EnvelopeModel
from facadeflux.reporting.summary import (
    build_construction_summary,
    build_orientation_summary,
    build_summary,
    construction_layer_table,
    construction_summary_rows,
    fmt,
)


class TestFormatting:
    """Tests for number formatting."""

    @pytest.mark.parametrize("value, expected", [
        (40.0, "40"),
        (3.846153, "3.846"),
        (0.5, "0.5"),
        (506.4, "506.4"),
        (-0.0001, "0"),
        (None, "N/A"),
    ])
    def test_fmt(self, value, expected):
        """Test up-to-three-decimal formatting."""
        assert fmt(value) == expected


class TestOrientationSummary:
    """Tests for the per-orientation block."""

    @pytest.fixture
    def north_block(self, north_wall, north_window) -> str:
        result = aggregate_orientation([north_wall, north_window], ETTV_COEFFICIENTS)
        return build_orientation_summary(result, ETTV_COEFFICIENTS, IndexType.ETTV)

    def test_header_lines(self, north_block):
        """Test the totals of the orientation block."""
        lines = north_block.splitlines()
        assert lines[0] == "Orientation: North (N)"
        assert "Average ETTV: 40.027 W/m²" in lines
        assert "WWR: 33.33%" in lines
        assert "Gross area: 15 m²" in lines
        assert "Correction Factor (CF): 0.8" in lines

    def test_construction_tables(self, north_block):
        """Test opaque and fenestration contribution rows."""
        lines = north_block.splitlines()
        assert "ID, Description, Area, U-Value (W/m²K), 12 x Area x U-Value" in lines
        assert "W1, Wall, 10 m², 0.5, 60" in lines
        assert "G1, Glazing, 5 m², 2, 0.6, 34, 506.4" in lines
        assert lines.index("Opaque Construction") < lines.index("Fenestration Construction")

    def test_retv_headers(self, north_wall, north_window):
        """Test that table headers follow the coefficients in use."""
        result = aggregate_orientation([north_wall, north_window], RETV_COEFFICIENTS)
        block = build_orientation_summary(result, RETV_COEFFICIENTS, IndexType.RETV)
        assert "Average RETV" in block
        assert "3.4 x Area x U-Value" in block
        assert "58.6 x Area x SC x CF" in block


class TestModelSummary:
    """Tests for the whole-model summary."""

    def test_reference_summary(self, north_model):
        """Test totals, verdict and orientation breakdown."""
        summary = calculate_ettv(north_model).summary

        assert summary.startswith("Project: Reference (version 1)")
        assert "Limit: 50 W/m² (PASS)" in summary
        assert "Total gross heat gain: 600.4 W" in summary
        assert "- Orientation: North (N)" in summary
        assert "Envelope Construction Summary" in summary

    def test_build_summary_matches_result(self, north_model):
        """Test that build_summary renders the stored summary."""
        result = calculate_ettv(north_model)
        assert build_summary(result) == result.summary

    def test_empty_summary(self):
        """Test the summary of an empty model."""
        result = EnvelopeCalculator().calculate(EnvelopeModel())
        assert "Average ETTV: N/A" in result.summary
        assert "Notes:" in result.summary
        assert "Breakdown by orientation" not in result.summary


class TestConstructionSummary:
    """Tests for construction summary and layer tables."""

    def test_rows(self, wall_construction, window_construction):
        """Test summary rows with SC for fenestration only."""
        rows = construction_summary_rows([wall_construction, window_construction])
        assert rows[0].sc is None
        assert rows[1].sc == pytest.approx(0.6)
        assert rows[1].kind == "fenestration"

    def test_layer_table_uses_configured_films(self):
        """Test layer tables with the films the U-value was derived with."""
        construction = opaque_from_layers("W2", "Block wall", [Material("Concrete", 0.1, 1.0)])
        table = construction_layer_table(construction)
        assert table.inside_film == settings.inside_film_resistance
        assert table.outside_film == settings.outside_film_resistance
        assert table.total_resistance == pytest.approx(0.26)

    def test_layer_table_explicit_films(self):
        """Test the tabulated 0.044 outside film on request."""
        construction = opaque_from_layers("W2", "Block wall", [Material("Concrete", 0.1, 1.0)])
        table = construction_layer_table(construction, rse=RSE_BCA_TABLE)
        assert table.outside_film == 0.044
        assert table.total_resistance == pytest.approx(0.264)

    def test_row_and_table_u_values_agree(self):
        """Test that a layered construction reports one U-value."""
        layered = opaque_from_layers("W2", "Block wall", [Material("Concrete", 0.1, 1.0)])
        text = build_construction_summary([layered])

        assert "W2, Block wall, 3.846, N/A" in text
        assert "U-Value: 3.846 W/m²K" in text
        assert "Layer-derived U-Value" not in text

    def test_explicit_u_value_wins_over_layers(self):
        """Test that an explicit U-value is reported and the layer value is marked unused."""
        construction = OpaqueConstruction(
            id="W3",
            name="Rated wall",
            materials=(Material("Concrete", 0.1, 1.0),),
            u_value=0.5,
        )
        text = build_construction_summary([construction])

        assert "W3, Rated wall, 0.5, N/A" in text
        assert "U-Value: 0.5 W/m²K" in text
        assert "Layer-derived U-Value: 3.846 W/m²K (not used)" in text

    def test_summary_text(self, wall_construction):
        """Test the construction summary block with a layer table."""
        layered = opaque_from_layers("W2", "Block wall", [Material("Concrete", 0.1, 1.0)])
        text = build_construction_summary([wall_construction, layered])

        assert text.startswith("Envelope Construction Summary")
        assert "W1, Wall, 0.5, N/A" in text
        assert "Concrete, 0.1, 1, 0.1" in text
        assert "Outside film, , , 0.04" in text
        assert "Inside film, , , 0.12" in text
        assert "Total thermal resistance: 0.26 m²K/W" in text

    def test_no_constructions(self):
        """Test that no constructions gives an empty block."""
        assert build_construction_summary([]) == ""
