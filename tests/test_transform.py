"""Tests for per-cell formatting."""

from json_table.options import Options
from json_table.transform import (
    MAX_CELL_LENGTH,
    common_prefix_length,
    default_transform,
    humanize_header,
    strip_common_prefix,
    transform_table,
)


class TestHumanizeHeader:
    """Tests for humanize_header."""

    def test_slashes_and_underscores(self) -> None:
        """Test separators become spaces and words are title-cased."""
        assert humanize_header("/formatted_address") == "Formatted Address"
        assert humanize_header("/name") == "Name"

    def test_lowercases_rest_of_word(self) -> None:
        """Test only the first character of each word stays upper case."""
        assert humanize_header("/userID/HTTP_code") == "Userid Http Code"

    def test_empty(self) -> None:
        """Test empty headers stay empty."""
        assert humanize_header("") == ""


class TestCommonPrefix:
    """Tests for common prefix detection and stripping."""

    def test_shared_object_prefix(self) -> None:
        """Test a shared parent path is detected."""
        assert common_prefix_length(["/person/name", "/person/age"]) == 8

    def test_prefix_is_character_level(self) -> None:
        """Test the prefix may stop in the middle of a key."""
        assert common_prefix_length(["/person/name", "/person/nick"]) == 9

    def test_shrinks_left_to_right(self) -> None:
        """Test later headers can only shorten the prefix."""
        assert common_prefix_length(["/a/x", "/a/y", "/b"]) == 1

    def test_empty_header_collapses(self) -> None:
        """Test any empty header disables stripping."""
        assert common_prefix_length(["/a/x", "", "/a/y"]) == 0
        assert common_prefix_length(["", "/a"]) == 0

    def test_single_header(self) -> None:
        """Test fewer than two headers have no common prefix."""
        assert common_prefix_length(["/a/b"]) == 0

    def test_strip_in_place(self) -> None:
        """Test stripping mutates the header list."""
        headers = ["/person/name", "/person/age"]
        assert strip_common_prefix(headers) == 8
        assert headers == ["name", "age"]


class TestTransformTable:
    """Tests for the whole-table pipeline."""

    def test_null_fill(self) -> None:
        """Test missing cells become empty strings."""
        rows = [["/a", "/b"], [1, None]]
        transform_table(rows, Options())
        assert rows == [["A", "B"], ["1", ""]]

    def test_common_prefix_stripped_before_humanizing(self) -> None:
        """Test shared parent paths are removed from headers."""
        rows = [["/person/name", "/person/age"], ["Ada", 36]]
        transform_table(rows, Options())
        assert rows[0] == ["Name", "Age"]

    def test_raw_headers(self) -> None:
        """Test rawHeaders keeps paths untouched."""
        rows = [["/person/name", "/person/age"], ["Ada", 36]]
        transform_table(rows, Options(raw_headers=True))
        assert rows == [["/person/name", "/person/age"], ["Ada", "36"]]

    def test_truncation(self) -> None:
        """Test long values are cut to MAX_CELL_LENGTH characters."""
        rows = [["/a"], ["x" * 300]]
        transform_table(rows, Options())
        assert len(rows[1][0]) == MAX_CELL_LENGTH == 256

    def test_no_truncate_keeps_values(self) -> None:
        """Test noTruncate leaves values as they are."""
        rows = [["/a", "/b"], ["x" * 300, 7]]
        transform_table(rows, Options(no_truncate=True))
        assert rows[1] == ["x" * 300, 7]

    def test_stringifies_scalars(self) -> None:
        """Test booleans and numbers are rendered as text."""
        rows = [["/a", "/b", "/c"], [True, 2.0, 0]]
        transform_table(rows, Options())
        assert rows[1] == ["true", "2", "0"]

    def test_debug_location(self) -> None:
        """Test debugLocation tags non-empty cells with [row,col]."""
        rows = [["/a", "/b"], [1, None]]
        transform_table(rows, Options(debug_location=True))
        assert rows == [["[0,0]A", "[0,1]B"], ["[1,0]1", ""]]

    def test_custom_transform(self) -> None:
        """Test a custom transform replaces the default pipeline."""
        calls = []

        def upper(rows, row, column, options):
            calls.append((row, column))
            rows[row][column] = str(rows[row][column]).upper()

        rows = [["/a"], ["x"]]
        transform_table(rows, Options(), transform=upper)
        assert rows == [["/A"], ["X"]]
        assert calls == [(0, 0), (1, 0)]

    def test_default_transform_single_cell(self) -> None:
        """Test default_transform only touches the given cell."""
        rows = [["/x/a", "/x/b"], [1, 2]]
        default_transform(rows, 1, 1, Options())
        assert rows == [["/x/a", "/x/b"], [1, "2"]]
