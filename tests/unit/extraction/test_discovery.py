"""Tests for source file discovery."""

from __future__ import annotations

from pathlib import Path

from locale_sync.extraction.discovery import discover_source_files, expand_braces


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text("", encoding="utf-8")
    return path


class TestExpandBraces:
    """Test expand_braces."""

    def test_no_braces(self) -> None:
        """Plain patterns are returned as-is."""
        assert expand_braces("src/*.ts") == ["src/*.ts"]

    def test_single_group(self) -> None:
        """One group expands to each option."""
        assert expand_braces("src/**/*.{ts,tsx,js}") == [
            "src/**/*.ts",
            "src/**/*.tsx",
            "src/**/*.js",
        ]

    def test_multiple_groups(self) -> None:
        """Groups expand as a cartesian product."""
        assert expand_braces("{app,lib}/*.{ts,js}") == [
            "app/*.ts",
            "app/*.js",
            "lib/*.ts",
            "lib/*.js",
        ]


class TestDiscoverSourceFiles:
    """Test discover_source_files."""

    def test_recursive_and_sorted(self, tmp_path: Path) -> None:
        """Matching files are found at any depth and sorted."""
        b = _touch(tmp_path / "src" / "b.tsx")
        a = _touch(tmp_path / "src" / "nested" / "a.ts")
        _ = _touch(tmp_path / "src" / "style.css")

        found = discover_source_files(["src/**/*.{ts,tsx}"], root=tmp_path)

        assert found == sorted([a, b])

    def test_excluded_directories(self, tmp_path: Path) -> None:
        """Dependency and build directories are skipped."""
        kept = _touch(tmp_path / "src" / "app.ts")
        _ = _touch(tmp_path / "src" / "node_modules" / "lib" / "index.ts")
        _ = _touch(tmp_path / "src" / "dist" / "bundle.ts")

        assert discover_source_files(["src/**/*.ts"], root=tmp_path) == [kept]

    def test_overlapping_globs_are_unique(self, tmp_path: Path) -> None:
        """A file matched twice is listed once."""
        path = _touch(tmp_path / "src" / "app.ts")

        found = discover_source_files(["src/*.ts", "src/**/*.ts"], root=tmp_path)

        assert found == [path]

    def test_custom_exclusions(self, tmp_path: Path) -> None:
        """The exclusion set can be replaced."""
        path = _touch(tmp_path / "vendor" / "x.ts")

        assert discover_source_files(["**/*.ts"], root=tmp_path) == [path]
        assert discover_source_files(["**/*.ts"], root=tmp_path, exclude_dirs={"vendor"}) == []
