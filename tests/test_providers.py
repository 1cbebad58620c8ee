"""Tests for the Victoria 3 documentation provider."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

import pytest

from pdxdoc.config import ProfileConfig, ProfileGame
from pdxdoc.errors import ProviderError
from pdxdoc.providers import BranchRevParser, Victoria3DocProvider, provider_for_game

GAME_REV = "0123456789abcdef0123456789abcdef01234567"
ENGINE_REV = "fedcba9876543210fedcba9876543210fedcba98"


def _write_version_files(
    root: Path, *, branch: str = "release/1.7.1", game_rev: str = GAME_REV
) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "caligula_branch.txt").write_text(f"{branch}\n", encoding="utf-8")
    (root / "caligula_rev.txt").write_text(f"{game_rev}\n", encoding="utf-8")
    (root / "clausewitz_branch.txt").write_text("clausewitz/main\n", encoding="utf-8")
    (root / "clausewitz_rev.txt").write_text(f"{ENGINE_REV}\n", encoding="utf-8")
    return root


def test_branch_rev_parser_reads_version(tmp_path: Path) -> None:
    root = _write_version_files(tmp_path / "game")

    version = BranchRevParser.parse(root, "caligula")

    assert version.version_number == "1.7.1"
    assert version.detailed == (
        "game version release/1.7.1 commit 012345678\n"
        "clausewitz version clausewitz/main commit fedcba987"
    )


def test_short_revision_is_rejected(tmp_path: Path) -> None:
    root = _write_version_files(tmp_path / "game", game_rev="abc123")

    with pytest.raises(ProviderError, match="invalid revision in caligula_rev.txt"):
        BranchRevParser.parse(root, "caligula")


def test_branch_without_version_is_rejected(tmp_path: Path) -> None:
    root = _write_version_files(tmp_path / "game", branch="main")

    with pytest.raises(ProviderError, match="can't get version number"):
        BranchRevParser.parse(root, "caligula")


def test_version_info_is_optional(
    profile: ProfileConfig, tmp_path: Path, log_messages: list[str]
) -> None:
    provider = Victoria3DocProvider()

    assert provider.read_version_info(profile) is None

    missing = dc.replace(profile, game_data_dir=tmp_path / "nowhere")
    assert provider.read_version_info(missing) is None
    assert any(message.startswith("WARNING Version files missing") for message in log_messages)


def test_version_info_from_game_dir(profile: ProfileConfig, tmp_path: Path) -> None:
    root = _write_version_files(tmp_path / "game")

    version = Victoria3DocProvider().read_version_info(dc.replace(profile, game_data_dir=root))

    assert version is not None
    assert version.version_number == "1.7.1"


def test_missing_script_docs_warns(
    profile: ProfileConfig, tmp_path: Path, log_messages: list[str]
) -> None:
    missing = dc.replace(profile, script_docs=tmp_path / "absent.json")

    assert Victoria3DocProvider().read_script_docs(missing) is None
    assert any("no such file exists" in message for message in log_messages)


def test_script_docs_are_loaded(profile: ProfileConfig) -> None:
    docs = Victoria3DocProvider().read_script_docs(profile)

    assert docs is not None
    assert len(docs.entries) == 12


def test_categories(profile: ProfileConfig) -> None:
    categories = Victoria3DocProvider().get_categories(profile)

    assert [category.name for category in categories] == [
        "custom_loc",
        "effects",
        "event_targets",
        "modifiers",
        "on_actions",
        "triggers",
    ]
    assert len({category.id for category in categories}) == 6


def test_provider_for_game() -> None:
    assert isinstance(provider_for_game(ProfileGame.VICTORIA3), Victoria3DocProvider)
