"""Tests for model path remapping helpers."""

from __future__ import annotations

from tileset_gateway.utils.paths import (
    change_base_path_to_pv_path,
    remove_pv_path_from_model_path,
    replace_back_quotes_with_quotes,
    to_mounted_path,
)


class TestChangeBasePathToPvPath:
    def test_replaces_root(self) -> None:
        assert (
            change_base_path_to_pv_path("/data/models/a", base_path="/data/models", pv_path="/mnt/m")
            == "/mnt/m/a"
        )

    def test_replaces_first_occurrence_only(self) -> None:
        assert (
            change_base_path_to_pv_path("/x/y/x/z", base_path="/x", pv_path="/pv")
            == "/pv/y/x/z"
        )

    def test_untouched_when_absent(self) -> None:
        assert change_base_path_to_pv_path("/other/a", base_path="/data", pv_path="/mnt") == "/other/a"


class TestReplaceBackQuotes:
    def test_windows_separators(self) -> None:
        assert replace_back_quotes_with_quotes("\\\\share\\models\\a") == "//share/models/a"

    def test_posix_unchanged(self) -> None:
        assert replace_back_quotes_with_quotes("/mnt/models/a") == "/mnt/models/a"


class TestRemovePvPath:
    def test_strips_root(self) -> None:
        assert remove_pv_path_from_model_path("/mnt/models/a/t.json", pv_path="/mnt/models") == "a/t.json"

    def test_trailing_slash_in_root(self) -> None:
        assert remove_pv_path_from_model_path("/mnt/models/a/t.json", pv_path="/mnt/models/") == "a/t.json"


class TestToMountedPath:
    def test_windows_share(self) -> None:
        assert (
            to_mounted_path("\\\\share\\models\\City\\v1", base_path="\\\\share\\models", pv_path="/mnt/models")
            == "/mnt/models/City/v1"
        )
