"""Tests for PathMapper: title <-> relative path mapping."""

import pytest

from goiki.store.errors import ParseError
from goiki.store.paths import PathMapper


class TestToPath:
    def test_appends_extension(self, tmp_path):
        assert PathMapper(tmp_path, "md").to_path("FrontPage") == "FrontPage.md"

    def test_nested_title(self, tmp_path):
        mapper = PathMapper(tmp_path, "md")
        assert mapper.to_path("projects/2024/Plan") == "projects/2024/Plan.md"

    def test_leading_dot_in_extension_is_ignored(self, tmp_path):
        assert PathMapper(tmp_path, ".txt").to_path("Notes") == "Notes.txt"

    def test_empty_extension_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="extension"):
            PathMapper(tmp_path, "")

    @pytest.mark.parametrize(
        "title",
        ["", "   ", "../etc/passwd", "a//b", "/abs", "trailing/", "-option"],
    )
    def test_invalid_titles_rejected(self, tmp_path, title):
        with pytest.raises(ValueError, match="Title"):
            PathMapper(tmp_path, "md").to_path(title)


class TestToTitle:
    def test_strips_extension(self, tmp_path):
        assert PathMapper(tmp_path, "md").to_title("FrontPage.md") == "FrontPage"

    def test_nested_path(self, tmp_path):
        assert PathMapper(tmp_path, "md").to_title("a/b/C.md") == "a/b/C"

    def test_inverse_of_to_path(self, tmp_path):
        mapper = PathMapper(tmp_path, "md")
        assert mapper.to_title(mapper.to_path("x/Y")) == "x/Y"

    def test_wrong_extension_raises(self, tmp_path):
        with pytest.raises(ParseError, match="does not end with"):
            PathMapper(tmp_path, "md").to_title("notes.txt")

    def test_extension_only_raises(self, tmp_path):
        with pytest.raises(ParseError):
            PathMapper(tmp_path, "md").to_title(".md")

    def test_extension_must_match_exactly(self, tmp_path):
        with pytest.raises(ParseError):
            PathMapper(tmp_path, "md").to_title("page.mdx")

    def test_parse_error_is_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            PathMapper(tmp_path, "md").to_title("page")


class TestAbsolute:
    def test_joins_with_root(self, tmp_path):
        mapper = PathMapper(tmp_path, "md")
        assert mapper.absolute("a/B.md") == tmp_path.resolve() / "a" / "B.md"

    def test_escaping_root_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="outside the store root"):
            PathMapper(tmp_path / "wiki", "md").absolute("../secret.md")
