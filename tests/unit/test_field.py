"""
Unit tests for Field, neighbor enumeration, generators and safe-zone relocation.
"""
import numpy as np
import pytest

from minesweeper import (
    EmptyFieldGenerator,
    Field,
    FieldGenerationArguments,
    FrozenFieldError,
    FullFieldGenerator,
    InvalidDimensions,
    OutOfBounds,
    PresetFieldGenerator,
    RandomFieldGenerator,
    make_safe,
    neighbors,
)


# ============================================================================
# Field Tests
# ============================================================================

class TestField:
    """Test field storage and access."""

    def test_from_rows_reads_layout(self, corner_mine_field: Field) -> None:
        """Text layout marks mines with '*'."""
        assert corner_mine_field.shape == (3, 3)
        assert corner_mine_field[2, 2] is True
        assert corner_mine_field.mine(0, 0) is False
        assert corner_mine_field.mine_count == 1
        assert list(corner_mine_field.mines()) == [(2, 2)]

    def test_from_rows_accepts_booleans(self) -> None:
        """Nested booleans work as a layout too."""
        field = Field.from_rows([[True, False], [False, False]])
        assert field[0, 0] is True
        assert field.mine_count == 1

    def test_ragged_layout_raises_error(self) -> None:
        """Rows of different lengths are rejected."""
        with pytest.raises(InvalidDimensions):
            Field.from_rows(["..", "..."])

    def test_negative_dimensions_raise_error(self) -> None:
        """Field cannot have negative size."""
        with pytest.raises(InvalidDimensions):
            Field(-1, 3)

    @pytest.mark.parametrize("position", [(-1, 0), (0, -1), (3, 0), (0, 3)])
    def test_out_of_bounds_access(
        self, corner_mine_field: Field, position
    ) -> None:
        """Reading outside the grid raises OutOfBounds."""
        with pytest.raises(OutOfBounds):
            corner_mine_field[position]

    def test_frozen_field_rejects_writes(self, corner_mine_field: Field) -> None:
        """Generated fields are read-only."""
        assert corner_mine_field.frozen is True
        with pytest.raises(FrozenFieldError):
            corner_mine_field[0, 0] = True

    def test_copy_is_writable_and_independent(
        self, corner_mine_field: Field
    ) -> None:
        """Copies can be edited without touching the original."""
        clone = corner_mine_field.copy()
        clone[0, 0] = True
        assert clone.mine_count == 2
        assert corner_mine_field.mine_count == 1
        assert clone != corner_mine_field

    def test_to_array_is_read_only(self, corner_mine_field: Field) -> None:
        """Array view cannot be used to change mines."""
        array = corner_mine_field.to_array()
        assert array.dtype == np.bool_
        with pytest.raises(ValueError):
            array[0, 0] = True


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test 8-neighborhood enumeration."""

    def test_center_has_eight_neighbors(self) -> None:
        """Interior cell has all 8 neighbors."""
        assert len(neighbors(1, 1, 3, 3)) == 8

    def test_corner_has_three_neighbors(self) -> None:
        """Corner cell has 3 neighbors."""
        assert sorted(neighbors(0, 0, 3, 3)) == [(0, 1), (1, 0), (1, 1)]

    def test_single_cell_has_no_neighbors(self) -> None:
        """1x1 grid has no neighbors."""
        assert neighbors(0, 0, 1, 1) == []

    def test_neighbors_never_out_of_bounds(self) -> None:
        """Every neighbor lies inside the grid."""
        for row in range(4):
            for col in range(5):
                for r, c in neighbors(row, col, 4, 5):
                    assert 0 <= r < 4 and 0 <= c < 5


# ============================================================================
# Generator Tests
# ============================================================================

class TestGenerators:
    """Test field generator variants."""

    @pytest.mark.parametrize("rows, columns", [(0, 0), (0, 4), (3, 0), (1, 1), (7, 5)])
    @pytest.mark.parametrize(
        "generator",
        [FullFieldGenerator(), EmptyFieldGenerator(), RandomFieldGenerator()],
    )
    def test_generate_returns_requested_shape(
        self, generator, rows: int, columns: int
    ) -> None:
        """Every generator honors the requested shape."""
        field = generator.generate(rows, columns)
        assert field.shape == (rows, columns)
        assert field.frozen is True

    @pytest.mark.parametrize("rows, columns", [(-1, 3), (3, -1), (-2, -2)])
    def test_negative_dimensions_raise_error(self, rows: int, columns: int) -> None:
        """Negative dimensions fail with InvalidDimensions."""
        with pytest.raises(InvalidDimensions):
            RandomFieldGenerator().generate(rows, columns)

    def test_full_generator_mines_everything(self) -> None:
        """Degenerate generator mines every cell."""
        field = FullFieldGenerator().generate(3, 4)
        assert field.mine_count == 12

    def test_empty_generator_places_no_mines(self) -> None:
        """Empty generator places nothing."""
        assert EmptyFieldGenerator().generate(4, 4).mine_count == 0

    def test_random_generator_places_exact_count(self) -> None:
        """Random generator places the requested mine count."""
        args = FieldGenerationArguments(mines=10, seed=7)
        field = RandomFieldGenerator().generate(9, 9, args)
        assert field.mine_count == 10

    def test_random_generator_uses_density(self) -> None:
        """Density applies to the available cells."""
        args = FieldGenerationArguments(density=0.25, seed=3)
        field = RandomFieldGenerator().generate(4, 5, args)
        assert field.mine_count == 5

    def test_random_generator_is_reproducible(self) -> None:
        """Same seed gives the same field."""
        args = FieldGenerationArguments(mines=15, seed=42)
        first = RandomFieldGenerator().generate(8, 8, args)
        second = RandomFieldGenerator().generate(8, 8, args)
        assert first == second

    def test_random_generator_respects_safe_zone(self) -> None:
        """No mine is placed inside the safe zone."""
        zone = frozenset((r, c) for r in range(3) for c in range(3))
        for seed in range(20):
            args = FieldGenerationArguments(mines=40, safe_zone=zone, seed=seed)
            field = RandomFieldGenerator().generate(7, 7, args)
            assert field.mine_count == 40
            assert not any(field[position] for position in zone)

    def test_random_generator_rejects_too_many_mines(self) -> None:
        """More mines than free cells is an error."""
        args = FieldGenerationArguments(mines=10)
        with pytest.raises(ValueError, match="Too many mines"):
            RandomFieldGenerator().generate(3, 3, args)

    def test_preset_generator_returns_layout(self) -> None:
        """Preset generator reproduces its layout."""
        generator = PresetFieldGenerator(["*.", ".*"])
        field = generator.generate(2, 2)
        assert sorted(field.mines()) == [(0, 0), (1, 1)]

    def test_preset_generator_rejects_other_shapes(self) -> None:
        """Preset layout must match the requested shape."""
        with pytest.raises(InvalidDimensions):
            PresetFieldGenerator(["*."]).generate(2, 2)


class TestGenerationArguments:
    """Test generation argument validation."""

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise ValueError."""
        with pytest.raises(ValueError, match="cannot be negative"):
            FieldGenerationArguments(mines=-1)

    @pytest.mark.parametrize("density", [-0.1, 1.5])
    def test_density_out_of_range_raises_error(self, density: float) -> None:
        """Density must be a fraction."""
        with pytest.raises(ValueError, match="between 0 and 1"):
            FieldGenerationArguments(density=density)

    def test_safe_zone_is_frozen(self) -> None:
        """Safe zone given as a set is stored as a frozenset."""
        args = FieldGenerationArguments(safe_zone={(0, 0)})
        assert args.safe_zone == frozenset({(0, 0)})


# ============================================================================
# Relocation Tests
# ============================================================================

class TestMakeSafe:
    """Test moving mines out of a safe zone."""

    def test_relocation_keeps_count_and_clears_zone(self) -> None:
        """Mines leave the zone and the total is unchanged."""
        field = Field.from_rows([
            "**...",
            "*....",
            ".....",
        ])
        zone = {(0, 0), (0, 1), (1, 0), (1, 1)}
        result = make_safe(field, zone, np.random.default_rng(0))
        assert result.mine_count == 3
        assert not any(result[position] for position in zone)
        assert result.frozen is True
        assert field.mine_count == 3

    def test_clear_zone_is_unchanged(self, corner_mine_field: Field) -> None:
        """Nothing moves when the zone is already clear."""
        result = make_safe(corner_mine_field, {(0, 0)}, np.random.default_rng(0))
        assert result == corner_mine_field

    def test_surplus_mines_are_dropped(self) -> None:
        """With no free cell left, the zone still ends up clear."""
        field = FullFieldGenerator().generate(2, 2)
        result = make_safe(field, {(0, 0)}, np.random.default_rng(0))
        assert result[0, 0] is False
        assert result.mine_count == 3
