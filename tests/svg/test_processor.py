"""Tests for per-file SVG processing."""

from pathlib import Path

import pytest

from svg_sheet.exceptions import (
    FileReadError,
    InvalidDimensionError,
    InvalidIdAfterSanitizeError,
    InvalidViewBoxError,
    RootIdReferencedError,
    SvgParseError,
)
from svg_sheet.models.sprite import DiagnosticKind
from svg_sheet.svg.processor import load_svg, process_svg, sprite_name


class TestSpriteName:
    """Test deriving pattern ids from file names."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [("icons/home.svg", "home"), ("a.b.svg", "a.b"), (Path("/x/menu.svg"), "menu")],
    )
    def test_strips_extension(self, path: str | Path, expected: str) -> None:
        """Test the .svg extension and directories are removed."""
        assert sprite_name(path) == expected


class TestProcessSvg:
    """Test the process_svg function."""

    def test_normalizes_dimensions_in_place(self) -> None:
        """Test width, height, and viewBox keep their positions."""
        result = process_svg(
            "a.svg", '<svg fill="none" width="24px" viewBox="0,0,24,24" height="24.0"><g/></svg>'
        )

        assert result.unit.attributes == [
            ("fill", "none"),
            ("width", "24"),
            ("viewBox", "0 0 24 24"),
            ("height", "24"),
        ]
        assert result.unit.render() == (
            '<pattern id="a" fill="none" width="24" viewBox="0 0 24 24" height="24"><g/></pattern>'
        )
        assert result.warnings == []

    def test_root_id_moves_to_data_id(self) -> None:
        """Test the root id is removed and appended as data-id with a warning."""
        result = process_svg("b.svg", '<svg id="B 1" width="1" height="1" viewBox="0 0 1 1"></svg>')

        assert result.unit.attributes[-1] == ("data-id", "B-1")
        assert all(key != "id" for key, _ in result.unit.attributes)
        assert [w.kind for w in result.warnings] == [DiagnosticKind.ROOT_ID_MOVED]
        assert result.warnings[0].details == {"original_id": "B 1", "sanitized_id": "B-1"}

    def test_root_id_is_not_a_child_id(self) -> None:
        """Test the root data-id does not take part in collision checks."""
        result = process_svg("b.svg", '<svg id="B"><g id="c"/></svg>')
        assert result.child_ids == ["c"]

    def test_missing_dimensions_warn_independently(self) -> None:
        """Test each missing width, height, and viewBox produces a warning."""
        result = process_svg("x.svg", '<svg width="2"><g/></svg>')

        assert [w.kind for w in result.warnings] == [
            DiagnosticKind.MISSING_HEIGHT,
            DiagnosticKind.MISSING_VIEWBOX,
        ]
        assert result.warning_count == 2

    def test_child_ids_rewritten(self) -> None:
        """Test child ids become data-ids in the unit content."""
        result = process_svg("x.svg", '<svg width="1"><g id="a"/><g id="a"/></svg>')

        assert result.unit.content == '<g data-id="a"/><g data-id="a-2"/>'
        assert result.child_ids == ["a", "a-2"]

    def test_referenced_root_id_fails(self) -> None:
        """Test a root id referenced in content is rejected."""
        with pytest.raises(RootIdReferencedError) as exc_info:
            process_svg("r.svg", '<svg id="root"><use href="#root"/></svg>')

        assert exc_info.value.message == (
            "root <svg> id 'root' in r.svg is referenced inside the document; "
            "root ids are moved to data-id"
        )
        assert exc_info.value.details == {"path": "r.svg", "id": "root"}

    def test_root_id_empty_after_sanitize(self) -> None:
        """Test a root id without valid characters is rejected."""
        with pytest.raises(InvalidIdAfterSanitizeError) as exc_info:
            process_svg("n.svg", '<svg id="123"></svg>')

        assert exc_info.value.message == "id '123' in n.svg is empty after sanitization"

    @pytest.mark.parametrize("attribute", ["width", "height"])
    def test_invalid_dimension(self, attribute: str) -> None:
        """Test invalid lengths name the attribute and value."""
        with pytest.raises(InvalidDimensionError) as exc_info:
            process_svg("d.svg", f'<svg {attribute}="50%"></svg>')

        assert exc_info.value.message == (
            f"invalid {attribute}='50%' in d.svg; expected positive number (optionally 'px')"
        )
        assert exc_info.value.details["attribute"] == attribute

    def test_invalid_viewbox(self) -> None:
        """Test an invalid viewBox is rejected with its raw value."""
        with pytest.raises(InvalidViewBoxError) as exc_info:
            process_svg("v.svg", '<svg viewBox="0 0 0 24"></svg>')

        assert exc_info.value.message == (
            "invalid viewBox='0 0 0 24' in v.svg; expected four numbers with positive width/height"
        )

    def test_parse_error_propagates(self) -> None:
        """Test parse failures surface as SvgParseError."""
        with pytest.raises(SvgParseError):
            process_svg("p.svg", "<svg width=1></svg>")


class TestLoadSvg:
    """Test reading and processing files."""

    def test_load_svg(self, tmp_path: Path) -> None:
        """Test a file is read and processed."""
        path = tmp_path / "icon.svg"
        path.write_text('<svg width="1" height="1" viewBox="0 0 1 1"><g/></svg>', encoding="utf-8")

        result = load_svg(path)

        assert result.unit.name == "icon"
        assert result.path == str(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unreadable file raises FileReadError with its cause."""
        path = tmp_path / "gone.svg"

        with pytest.raises(FileReadError) as exc_info:
            load_svg(path)

        assert exc_info.value.message == f"failed to read file: {path}"
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Test undecodable content raises FileReadError."""
        path = tmp_path / "bin.svg"
        path.write_bytes(b"<svg \xff\xfe></svg>")

        with pytest.raises(FileReadError) as exc_info:
            load_svg(path)

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
