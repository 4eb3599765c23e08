"""Tests for the scope pattern resolver."""

from __future__ import annotations

import itertools
from pathlib import Path

import pytest

from lintctl.scope.patterns import (
    DEFAULT_IGNORE_PATTERNS,
    ProjectDescriptor,
    build_scope_patterns,
    expand_extensionless_pattern,
    extension_glob,
)

EXT = ".{py,pyi}"


class TestExpandExtensionless:
    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("src", f"src/**/*{EXT}"),
            ("src/", f"src/**/*{EXT}"),
            ("**", f"**/*{EXT}"),
            ("src/**", f"src/**/*{EXT}"),
            ("src/**/*", f"src/**/*{EXT}"),
            ("src/*", f"src/*{EXT}"),
            ("src/**/*.py", "src/**/*.py"),
            ("setup.py", "setup.py"),
            (".", f"**/*{EXT}"),
            ("", ""),
        ],
    )
    def test_expansion(self, pattern: str, expected: str) -> None:
        assert expand_extensionless_pattern(pattern, EXT) == expected

    def test_never_double_expands(self) -> None:
        once = expand_extensionless_pattern("src", EXT)
        assert expand_extensionless_pattern(once, EXT) == once

    def test_extension_glob(self) -> None:
        assert extension_glob(["py", "pyi"]) == EXT
        assert extension_glob([".py"]) == ".py"
        assert extension_glob([]) == EXT


class TestBuildScopePatterns:
    def test_default_extension_scenario(self, tmp_path: Path) -> None:
        descriptor = ProjectDescriptor(base_dir=tmp_path, include=("src/**/*",))
        scope = build_scope_patterns([descriptor], root=tmp_path)
        assert scope.files == ("src/**/*.{py,pyi}",)
        assert scope.ignore == tuple(sorted(DEFAULT_IGNORE_PATTERNS))

    def test_empty_include_covers_base(self, tmp_path: Path) -> None:
        descriptor = ProjectDescriptor(base_dir=tmp_path / "pkg")
        scope = build_scope_patterns([descriptor], root=tmp_path)
        assert scope.files == ("pkg/**/*.{py,pyi}",)

    def test_union_of_two_descriptors(self, tmp_path: Path) -> None:
        root_project = ProjectDescriptor(base_dir=tmp_path, include=("src",))
        sub_project = ProjectDescriptor(
            base_dir=tmp_path / "packages" / "core",
            include=("lib/**",),
            exclude=("lib/generated",),
        )
        scope = build_scope_patterns([root_project, sub_project], root=tmp_path)
        assert scope.files == (
            "packages/core/lib/**/*.{py,pyi}",
            "src/**/*.{py,pyi}",
        )
        assert scope.ignore == (
            ".venv/**",
            "__pypackages__/**",
            "build/**",
            "dist/**",
            "node_modules/**",
            "packages/core/lib/generated",
        )

    def test_overlap_override_drops_exclude_covered_by_other_project(
        self, tmp_path: Path
    ) -> None:
        a = ProjectDescriptor(base_dir=tmp_path, include=("a/**",), exclude=("a/scripts/**",))
        b = ProjectDescriptor(base_dir=tmp_path, include=("a/scripts",), exclude=("dist",))
        scope = build_scope_patterns([a, b], root=tmp_path)
        assert "a/scripts/**" not in scope.ignore
        assert scope.ignore == ("dist",)

    def test_exclude_kept_without_force_include(self, tmp_path: Path) -> None:
        a = ProjectDescriptor(base_dir=tmp_path, include=("a/**",), exclude=("a/scripts/**",))
        b = ProjectDescriptor(base_dir=tmp_path, include=("b/**",), exclude=("b/tmp",))
        scope = build_scope_patterns([a, b], root=tmp_path)
        assert scope.files == ("a/**/*.{py,pyi}", "b/**/*.{py,pyi}")
        assert scope.ignore == ("a/scripts/**", "b/tmp")

    def test_force_include_wins_over_exclude(self, tmp_path: Path) -> None:
        a = ProjectDescriptor(base_dir=tmp_path, include=("a/**",), exclude=("a/scripts/**",))
        b = ProjectDescriptor(base_dir=tmp_path, include=("b/**",), exclude=("b/tmp",))
        scope = build_scope_patterns([a, b], ["./a/scripts"], root=tmp_path)
        assert "a/scripts/**" not in scope.ignore
        assert "a/scripts/**/*.{py,pyi}" in scope.files
        assert scope.ignore == ("b/tmp",)

    def test_force_include_rebased_from_its_base(self, tmp_path: Path) -> None:
        descriptor = ProjectDescriptor(
            base_dir=tmp_path, include=("tools/**",), exclude=("tools/gen/**",)
        )
        scope = build_scope_patterns(
            [descriptor], ["gen"], root=tmp_path, force_include_base=tmp_path / "tools"
        )
        assert "tools/gen/**/*.{py,pyi}" in scope.files
        assert scope.ignore == ()

    def test_custom_extensions(self, tmp_path: Path) -> None:
        descriptor = ProjectDescriptor(base_dir=tmp_path, include=("src",))
        scope = build_scope_patterns([descriptor], root=tmp_path, extensions=["py"])
        assert scope.files == ("src/**/*.py",)

    def test_no_descriptors(self, tmp_path: Path) -> None:
        scope = build_scope_patterns([], ["scripts"], root=tmp_path)
        assert scope.files == ("scripts/**/*.{py,pyi}",)
        assert scope.ignore == ()

    def test_deterministic_under_reordering(self, tmp_path: Path) -> None:
        descriptors = [
            ProjectDescriptor(base_dir=tmp_path, include=("a/**",), exclude=("a/scripts/**",)),
            ProjectDescriptor(base_dir=tmp_path / "b", include=("src",), exclude=("src/vendor",)),
            ProjectDescriptor(base_dir=tmp_path / "c"),
        ]
        results = {
            build_scope_patterns(list(order), ["a/scripts"], root=tmp_path)
            for order in itertools.permutations(descriptors)
        }
        assert len(results) == 1

    def test_files_and_ignore_are_disjoint_sorted_unique(self, tmp_path: Path) -> None:
        a = ProjectDescriptor(base_dir=tmp_path, include=("src", "src/"), exclude=("**/*.py",))
        b = ProjectDescriptor(base_dir=tmp_path, include=("**/*.py",), exclude=("build",))
        scope = build_scope_patterns([a, b], root=tmp_path)
        assert not set(scope.files) & set(scope.ignore)
        assert list(scope.files) == sorted(set(scope.files))
        assert list(scope.ignore) == sorted(set(scope.ignore))

    def test_force_include_lifts_any_depth_exclude(self, tmp_path: Path) -> None:
        descriptor = ProjectDescriptor(
            base_dir=tmp_path, include=("**/*.py",), exclude=("**/migrations", "**/gen")
        )
        scope = build_scope_patterns([descriptor], ["app/migrations"], root=tmp_path)
        assert scope.ignore == ("**/gen",)

    def test_other_project_include_lifts_any_depth_exclude(self, tmp_path: Path) -> None:
        a = ProjectDescriptor(base_dir=tmp_path, include=("a/**",), exclude=("**/scripts",))
        b = ProjectDescriptor(base_dir=tmp_path, include=("a/scripts",), exclude=("dist",))
        scope = build_scope_patterns([a, b], root=tmp_path)
        assert scope.ignore == ("dist",)
