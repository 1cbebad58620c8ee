"""End-to-end tests for rendering a documentation site."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import pytest
from bs4 import BeautifulSoup

from pdxdoc.cli import generate
from pdxdoc.config import ProfileConfig, SiteConfigError
from pdxdoc.errors import PdxdocError
from pdxdoc.generator import SiteGenerator, build_site, process_profile
from pdxdoc.page import GenericListPageBuilder, ScopeList
from pdxdoc.theme import Template, Theme

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

    from pdxdoc.config import SiteConfig


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def _hrefs(soup: BeautifulSoup, selector: str = "a") -> list[str]:
    return [str(anchor.get("href")) for anchor in soup.select(selector)]


@pytest.fixture
def built_site(site_config: SiteConfig) -> tuple[SiteConfig, list[Path]]:
    return site_config, build_site(site_config)


def test_build_site_writes_every_page(built_site: tuple[SiteConfig, list[Path]]) -> None:
    config, written = built_site
    relative = {path.relative_to(config.output_dir).as_posix() for path in written}

    assert relative == {
        "assets/style.css",
        "index.html",
        "custom_loc.html",
        "effects.html",
        "event_targets.html",
        "on_actions.html",
        "triggers.html",
        "scopes/country.html",
        "scopes/state.html",
        "scopes/character.html",
        "scopes/index.html",
        "modifiers/army_mask.html",
        "modifiers/tax_mask.html",
        "modifiers/tax_mask_p2.html",
        "modifiers/index.html",
    }
    assert all(path.exists() for path in written)


def test_category_page_links_and_anchors(built_site: tuple[SiteConfig, list[Path]]) -> None:
    config, _ = built_site
    soup = _soup(config.output_dir / "effects.html")

    assert [article["id"] for article in soup.select("article.pd-entry")] == [
        "add_loyalists",
        "add_radicals",
    ]
    loyalists = soup.select_one("article#add_loyalists")
    assert loyalists is not None
    assert "scopes/country.html" in _hrefs(loyalists, "table.pd-properties a")
    assert loyalists.select_one(".pd-highlight .pd-token-Number").get_text() == "5"
    stylesheet = soup.select_one('link[rel="stylesheet"]')
    assert stylesheet is not None
    assert str(stylesheet["href"]).startswith("assets/style.css?")


def test_scope_page_lists_back_references(built_site: tuple[SiteConfig, list[Path]]) -> None:
    config, _ = built_site
    soup = _soup(config.output_dir / "scopes" / "country.html")

    assert soup.select_one("h1").get_text() == "Scope: country"
    groups = [heading.get_text() for heading in soup.select(".pd-cross-ref-group h4")]
    assert groups == ["Effects", "Event Targets", "On Actions", "Triggers"]
    refs = _hrefs(soup, ".pd-cross-refs a")
    assert "../effects.html#add_loyalists" in refs
    assert "../on_actions.html#on_monthly_pulse" in refs
    assert _hrefs(soup, ".pd-breadcrumbs a") == ["../index.html", "index.html", "country.html"]
    assert str(soup.select_one('link[rel="stylesheet"]')["href"]).startswith(
        "../assets/style.css?"
    )


def test_mask_page_pagination(built_site: tuple[SiteConfig, list[Path]]) -> None:
    config, _ = built_site
    soup = _soup(config.output_dir / "modifiers" / "tax_mask_p2.html")

    assert [row["id"] for row in soup.select("table.pd-modifiers tbody tr")] == [
        "state_tax_waste_mult"
    ]
    assert "tax_mask.html" in _hrefs(soup, ".pd-pagination a")
    assert soup.select_one(".pd-page-current").get_text() == "2"
    assert soup.select_one(".pd-crumb-page").get_text() == "(page 2 of 2)"


def test_index_page_has_sitemap(built_site: tuple[SiteConfig, list[Path]]) -> None:
    config, _ = built_site
    soup = _soup(config.output_dir / "index.html")

    links = _hrefs(soup, ".pd-sitemap a")
    assert "effects.html" in links
    assert "scopes/index.html" in links
    assert "modifiers/tax_mask.html" in links
    assert "modifiers/tax_mask_p2.html" not in links


def test_stylesheet_includes_token_colours(built_site: tuple[SiteConfig, list[Path]]) -> None:
    config, _ = built_site
    css = (config.output_dir / "assets" / "style.css").read_text(encoding="utf-8")

    assert ".pd-token-Number" in css
    assert ".codehilite" in css
    assert ".pd-breadcrumbs" in css


def test_multiple_profiles_use_subfolders(site_config: SiteConfig) -> None:
    beta = ProfileConfig(
        name="beta",
        title="Victoria 3 Beta",
        game=site_config.profiles[0].game,
        script_docs=site_config.profiles[0].script_docs,
        description="Upcoming *patch* docs.",
    )
    config = dc.replace(site_config, profiles=[site_config.profiles[0], beta])

    build_site(config)

    assert (config.output_dir / "vic3" / "effects.html").exists()
    assert (config.output_dir / "beta" / "scopes" / "country.html").exists()
    root = _soup(config.output_dir / "index.html")
    assert _hrefs(root, ".pd-profiles h2 a") == ["vic3/index.html", "beta/index.html"]
    assert root.select_one(".pd-profiles em").get_text() == "patch"
    beta_scope = _soup(config.output_dir / "beta" / "scopes" / "country.html")
    assert _hrefs(beta_scope, ".pd-breadcrumbs a")[0] == "../index.html"
    assert str(beta_scope.select_one('link[rel="stylesheet"]')["href"]).startswith(
        "../../assets/style.css?"
    )


def test_duplicate_page_ids_are_rejected(site_config: SiteConfig) -> None:
    profile = site_config.profiles[0]
    dossier = process_profile(profile, site_config)
    dossier.builders.append(GenericListPageBuilder(ScopeList, [0]))

    with pytest.raises(PdxdocError, match="two pages with id"):
        SiteGenerator(site_config).add_profile(profile, dossier)


def test_missing_script_docs_still_writes_index(
    site_config: SiteConfig, tmp_path: Path
) -> None:
    profile = dc.replace(site_config.profiles[0], script_docs=tmp_path / "absent.json")
    config = dc.replace(site_config, profiles=[profile])

    written = build_site(config)

    assert config.output_dir / "index.html" in written
    assert not (config.output_dir / "effects.html").exists()


def test_custom_theme_templates(
    site_config: SiteConfig, mocker: MockerFixture
) -> None:
    theme = Theme(pygments_style="default")
    template_for = mocker.patch.object(theme, "template_for", wraps=theme.template_for)

    build_site(site_config, theme=theme)

    used = {call.args[0] for call in template_for.call_args_list}
    assert used == {
        Template.CATEGORY_LIST,
        Template.SCOPE,
        Template.MASK,
        Template.LIST_INDEX,
        Template.INDEX,
    }


def test_cli_generate_prints_written_paths(
    site_config: SiteConfig,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    mocker: MockerFixture,
) -> None:
    configure_logging = mocker.patch("pdxdoc.cli._configure_logging")
    config_path = tmp_path / "pdxdoc.yaml"
    config_path.write_text(
        "profiles:\n"
        "  - name: vic3\n"
        "    title: Victoria 3\n"
        f"    script_docs: {site_config.profiles[0].script_docs}\n",
        encoding="utf-8",
    )
    output_dir = tmp_path / "dist"

    generate(config=config_path, output_dir=output_dir)

    configure_logging.assert_called_once_with(verbose=False)
    out = capsys.readouterr().out
    assert "wrote" in out
    assert (output_dir / "effects.html").exists()
    assert (output_dir / "scopes" / "country.html").exists()


def test_cli_logs_fatal_config_errors(
    tmp_path: Path, log_messages: list[str], mocker: MockerFixture
) -> None:
    mocker.patch("pdxdoc.cli._configure_logging")
    config_path = tmp_path / "pdxdoc.yaml"
    config_path.write_text("profiles: []\n", encoding="utf-8")

    with pytest.raises(SiteConfigError):
        generate(config=config_path)

    assert any(message.startswith("ERROR Generation failed") for message in log_messages)
