"""Tests for loading ``pdxdoc.yaml`` site configuration."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from pdxdoc.config import (
    PaginationKind,
    ProfileGame,
    SiteConfigError,
    UrlScheme,
    load_site_config,
)


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "pdxdoc.yaml"
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_load_site_config_resolves_paths(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        output_dir: site
        url_scheme:
          base_url: https://docs.example.invalid
        pagination:
          type: alphabetic
          sub_limit: 30
        profiles:
          - name: vic3
            title: Victoria 3
            script_docs: data/script_docs.json
            game_data_dir: /games/vic3
            description: |
              Script docs for **Victoria 3**.
        """,
    )

    config = load_site_config(path)

    assert config.output_dir == tmp_path.resolve() / "site"
    assert config.url_scheme == UrlScheme("https://docs.example.invalid/")
    assert not config.url_scheme.is_relative
    assert config.pagination.kind is PaginationKind.ALPHABETIC
    assert config.pagination.limit == 30
    profile = config.get_profile("vic3")
    assert profile.game is ProfileGame.VICTORIA3
    assert profile.script_docs == tmp_path.resolve() / "data" / "script_docs.json"
    assert profile.game_data_dir == Path("/games/vic3")
    assert profile.description is not None
    assert profile.description.startswith("Script docs")
    assert not config.uses_profile_subfolders


def test_defaults(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        profiles:
          - name: vic3
            script_docs: docs.json
        """,
    )

    config = load_site_config(path)

    assert config.output_dir == tmp_path.resolve() / "public"
    assert config.url_scheme.is_relative
    assert config.pagination.kind is PaginationKind.ABSOLUTE
    assert config.pygments_style == "monokai"
    assert config.profiles[0].title == "vic3"


def test_multiple_profiles_use_subfolders(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        profiles:
          - name: vic3
            script_docs: a.json
          - name: vic3_beta
            script_docs: b.json
        """,
    )

    assert load_site_config(path).uses_profile_subfolders


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("profiles: []", "No profiles"),
        ("profiles: {vic3: {}}", "must be a list"),
        ("profiles: [vic3]", "must be mappings"),
        ("profiles: [{script_docs: a.json}]", "needs a 'name'"),
        ("profiles: [{name: vic3}]", "missing 'script_docs'"),
        ("profiles: [{name: vic3, script_docs: a.json, game: eu5}]", "unknown game"),
        (
            "profiles: [{name: a, script_docs: a.json}, {name: a, script_docs: b.json}]",
            "Duplicate profile names: a",
        ),
        (
            "url_scheme: ftp\nprofiles: [{name: a, script_docs: a.json}]",
            "url_scheme must be",
        ),
        (
            "pagination: {type: pages}\nprofiles: [{name: a, script_docs: a.json}]",
            "Unknown pagination type",
        ),
        (
            "pagination: {limit: 0}\nprofiles: [{name: a, script_docs: a.json}]",
            "positive integer",
        ),
    ],
)
def test_invalid_config(tmp_path: Path, body: str, message: str) -> None:
    path = _write_config(tmp_path, body)

    with pytest.raises(SiteConfigError, match=message):
        load_site_config(path)


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not found"):
        load_site_config(tmp_path / "absent.yaml")


def test_non_mapping_root(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "- just\n- a list")

    with pytest.raises(TypeError, match="mapping"):
        load_site_config(path)


def test_unknown_profile_lookup(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "profiles: [{name: a, script_docs: a.json}]")

    with pytest.raises(KeyError, match="Unknown profile"):
        load_site_config(path).get_profile("b")
