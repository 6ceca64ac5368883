"""
Unit Tests for Table Parser
===========================

Tests for row splitting, divider detection, normalization and the
parse_table entry point.
"""

import pytest

from tablesnap.core.table.parser import (
    EmptyTableError, TableParseError,
    split_row, is_divider_row, normalize_rows, parse_table
)
from tablesnap.models.schemas import TableGrid

from tests.utils.assertions import (
    assert_grid_rows, assert_no_divider_rows, assert_rectangular_grid
)
from tests.utils.data_generators import TableTextGenerator


class TestSplitRow:
    """Test splitting a single line into cells."""

    def test_leading_and_trailing_separators_dropped(self):
        assert split_row("| a | b |") == ["a", "b"]

    def test_no_outer_separators(self):
        assert split_row("a | b") == ["a", "b"]

    def test_only_leading_separator(self):
        assert split_row("| a | b") == ["a", "b"]

    def test_cells_are_trimmed(self):
        assert split_row("|   spaced   |\tTabbed\t|") == ["spaced", "Tabbed"]

    def test_inner_empty_cells_kept(self):
        assert split_row("| a |  | c |") == ["a", "", "c"]

    def test_lone_separator_collapses(self):
        assert split_row("|") is None

    def test_double_separator_is_one_empty_cell(self):
        assert split_row("||") == [""]

    def test_whitespace_between_pipes_collapses(self):
        # Blank leading and trailing segments are both dropped
        assert split_row("|   ") is None

    def test_blank_cells_survive(self):
        assert split_row("|   |   |") == ["", ""]


class TestDividerRow:
    """Test markdown separator detection."""

    @pytest.mark.parametrize("cells", [
        ["---"],
        ["---", "---"],
        ["------", "---"],
    ])
    def test_dash_rows_are_dividers(self, cells):
        assert is_divider_row(cells) is True

    @pytest.mark.parametrize("cells", [
        [],
        ["--"],
        ["---", "--"],
        ["---", "abc"],
        [":---", "---:"],
        ["uses---dashes"],
        ["---", ""],
    ])
    def test_other_rows_are_data(self, cells):
        assert is_divider_row(cells) is False


class TestNormalizeRows:
    """Test right-padding to the widest row."""

    def test_short_rows_padded(self):
        rows = normalize_rows([["a"], ["b", "c", "d"], ["e", "f"]])
        assert rows == [["a", "", ""], ["b", "c", "d"], ["e", "f", ""]]

    def test_rectangular_rows_unchanged(self):
        rows = [["a", "b"], ["c", "d"]]
        assert normalize_rows(rows) == rows

    def test_empty_input(self):
        assert normalize_rows([]) == []


class TestParseTable:
    """Test the full parser."""

    def test_separator_and_data(self, simple_table):
        grid = parse_table(simple_table)

        assert isinstance(grid, TableGrid)
        assert_grid_rows(grid, [["Name", "Notes"], ["Alice", "uses---dashes"]])

    def test_short_header_padded_to_widest_row(self, ragged_table):
        grid = parse_table(ragged_table)

        assert_grid_rows(grid, [["A", "B", ""], ["1", "2", "3"]])
        assert grid.column_count == 3

    @pytest.mark.parametrize("text", ["", "   \n\n  ", "no pipes here\nat all"])
    def test_no_table_raises_empty_error(self, text):
        with pytest.raises(EmptyTableError, match="no table data found"):
            parse_table(text)

    def test_empty_error_is_parse_error(self):
        with pytest.raises(TableParseError):
            parse_table("")

    def test_only_dividers_raises_empty_error(self):
        with pytest.raises(EmptyTableError):
            parse_table("| --- | --- |\n|---|\n")

    def test_non_table_lines_ignored(self):
        grid = parse_table(TableTextGenerator.embedded_in_prose())

        assert_grid_rows(grid, [["Component", "Owner"], ["parser", "dana"]])

    def test_divider_anywhere_is_dropped(self):
        text = "| a | b |\n| 1 | 2 |\n| --- | ---- |\n| 3 | 4 |"
        grid = parse_table(text)

        assert_grid_rows(grid, [["a", "b"], ["1", "2"], ["3", "4"]])
        assert_no_divider_rows(grid)

    def test_short_dash_cells_are_data(self):
        grid = parse_table("| a | b |\n| -- | -- |")

        assert_grid_rows(grid, [["a", "b"], ["--", "--"]])

    def test_alignment_markers_are_data(self):
        grid = parse_table("| a |\n| :---: |")

        assert grid.rows[1] == [":---:"]

    def test_document_order_preserved(self):
        grid = parse_table("| z |\n| y |\n| x |")

        assert [row[0] for row in grid.rows] == ["z", "y", "x"]
        assert grid.header == ["z"]

    def test_crlf_line_endings(self):
        grid = parse_table("| a | b |\r\n| --- | --- |\r\n| 1 | 2 |\r\n")

        assert_grid_rows(grid, [["a", "b"], ["1", "2"]])

    def test_indented_lines_trimmed(self):
        grid = parse_table("    | a | b |\n\t| 1 | 2 |")

        assert_grid_rows(grid, [["a", "b"], ["1", "2"]])

    def test_lone_pipe_lines_skipped(self):
        grid = parse_table("| a |\n|\n  |  \n| b |")

        assert_grid_rows(grid, [["a"], ["b"]])

    def test_blank_cell_line_kept(self):
        grid = parse_table("| a |\n|    |\n| b |")

        assert_grid_rows(grid, [["a"], [""], ["b"]])

    def test_long_row_defines_width(self):
        grid = parse_table("| a |\n| 1 | 2 | 3 | 4 |\n| x | y |")

        assert grid.column_count == 4
        assert grid.rows[1] == ["1", "2", "3", "4"]
        assert grid.rows[2] == ["x", "y", "", ""]

    def test_very_long_line(self):
        long_cell = "a" * 200_000
        grid = parse_table(TableTextGenerator.long_cell_table(200_000))

        assert grid.row_count == 2
        assert grid.rows[1][0] == long_cell

    def test_many_long_cells(self):
        cells = ["x" * 50_000 for _ in range(8)]
        text = "| " + " | ".join(cells) + " |"
        grid = parse_table(text)

        assert grid.rows == [cells]


class TestParserProperties:
    """Invariants that hold for any input."""

    @pytest.mark.parametrize("seed", range(10))
    def test_grid_is_rectangular(self, seed):
        grid = parse_table(TableTextGenerator.random_table(rows=12, max_cols=6, seed=seed))

        assert_rectangular_grid(grid)
        assert_no_divider_rows(grid)

    @pytest.mark.parametrize("seed", range(10))
    def test_reparse_keeps_shape(self, seed):
        grid = parse_table(TableTextGenerator.random_table(rows=8, max_cols=5, seed=seed))
        reparsed = parse_table(grid.to_text())

        assert reparsed.row_count == grid.row_count
        assert reparsed.column_count == grid.column_count
        assert reparsed.rows == grid.rows

    @pytest.mark.parametrize("seed", range(5))
    def test_padding_only_adds_empty_cells(self, seed):
        text = TableTextGenerator.random_table(rows=10, max_cols=7, seed=seed)
        raw_rows = [
            split_row(line.strip()) for line in text.split("\n")
        ]
        raw_rows = [row for row in raw_rows if row and not is_divider_row(row)]
        grid = parse_table(text)

        assert grid.column_count == max(len(row) for row in raw_rows)
        for raw, parsed in zip(raw_rows, grid.rows):
            assert parsed[:len(raw)] == raw
            assert all(cell == "" for cell in parsed[len(raw):])
