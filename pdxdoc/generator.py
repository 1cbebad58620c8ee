"""High-level orchestration for documentation site generation.

The build runs in strictly ordered phases: every profile's dossier is filled
and turned into pages, all profiles are recorded into one
:class:`~pdxdoc.mapper.SiteMapper`, the mapper is sealed, and only then are
pages rendered through Jinja templates and written to disk.

Example
-------
>>> from pathlib import Path
>>> from pdxdoc.config import load_site_config
>>> from pdxdoc.generator import build_site
>>> config = load_site_config(Path("pdxdoc.yaml"))  # doctest: +SKIP
>>> build_site(config)  # doctest: +SKIP
[PosixPath('public/assets/style.css'), PosixPath('public/effects.html'), ...]
"""

from __future__ import annotations

import hashlib
import typing as typ

from loguru import logger

from ._constants import INDEX_FILENAME
from .dossier import Dossier
from .errors import PdxdocError
from .helpers import TemplateHelpers
from .mapper import SiteMap, SiteMapper, SiteProfile
from .page import Breadcrumbs, GenericListPageBuilder, MaskList, PageContext, ScopeList
from .providers import DocInfo, provider_for_game
from .script_docs import StringTable
from .theme import Template, Theme

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import ProfileConfig, SiteConfig


def process_profile(profile: ProfileConfig, config: SiteConfig) -> Dossier:
    """Collect a profile's entries, scopes and masks into a dossier.

    Parameters
    ----------
    profile : ProfileConfig
        Profile to document.
    config : SiteConfig
        Site configuration shared by every profile.

    Returns
    -------
    Dossier
        Registry holding parsed entries plus the scope and mask builders.

    Raises
    ------
    MissingCategoryError
        If the provider emits an entry for a category it did not declare.
    ScriptDocsError
        If the script docs dump is malformed.
    ProviderError
        If the game's version files are malformed.
    """
    logger.info("Processing profile {}", profile.name)
    provider = provider_for_game(profile.game)

    version = provider.read_version_info(profile)
    if version is not None:
        logger.info("Found {} version {}", profile.game.value, version.version_number)

    script_docs = provider.read_script_docs(profile)
    string_table = script_docs.string_table if script_docs else StringTable([])
    dossier = Dossier(
        config,
        provider.get_categories(profile),
        string_table,
        DocInfo(version),
    )
    if script_docs is None:
        return dossier

    dossier.add_entries(script_docs.entries)
    logger.info("Collected {} entries", len(dossier.entries))

    dossier.add_builder(GenericListPageBuilder(ScopeList, script_docs.scope_ids))
    dossier.add_builder(GenericListPageBuilder(MaskList, script_docs.mask_ids))
    return dossier


def _write(path: Path, contents: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(contents, bytes):
        path.write_bytes(contents)
    else:
        path.write_text(contents, encoding="utf-8")
    return path


class SiteGenerator:
    """Render every profile of a site into static HTML."""

    def __init__(self, config: SiteConfig, theme: Theme | None = None) -> None:
        """Initialize the generator.

        Parameters
        ----------
        config : SiteConfig
            Site configuration; ``output_dir`` decides where files land.
        theme : Theme, optional
            Templates and assets; defaults to the packaged theme styled with
            ``config.pygments_style``.
        """
        self.config = config
        self.theme = theme or Theme(pygments_style=config.pygments_style)
        self.mapper = SiteMapper(config)
        self.profiles: list[SiteProfile] = []
        self._asset_version: str | None = None

    def add_profile(self, profile: ProfileConfig, dossier: Dossier) -> SiteProfile:
        """Build the pages of ``dossier`` and queue them for rendering.

        Raises
        ------
        PdxdocError
            If two pages of the profile share an id.
        """
        pages = dossier.create_pages()
        seen: set[int] = set()
        for page in pages:
            if page.id in seen:
                msg = f"Profile '{profile.name}' has two pages with id {page.id}."
                raise PdxdocError(msg)
            seen.add(page.id)

        site_profile = SiteProfile(profile, dossier, pages)
        self.profiles.append(site_profile)
        logger.info("Profile {} has {} pages", profile.name, len(pages))
        return site_profile

    def generate(self) -> list[Path]:
        """Record, seal and render every profile.

        Returns
        -------
        list[Path]
            Every file written, assets first.
        """
        for site_profile in self.profiles:
            self.mapper.record_profile(site_profile)
        self.mapper.seal()

        written = self._write_assets()
        for site_profile in self.profiles:
            written.extend(self._render_profile(site_profile))
        if self.config.uses_profile_subfolders:
            written.append(self._write_profiles_index())
        logger.info("Wrote {} files to {}", len(written), self.config.output_dir)
        return written

    def _write_assets(self) -> list[Path]:
        written = []
        digest = hashlib.blake2b(digest_size=6)
        for name, contents in self.theme.assets():
            digest.update(contents)
            written.append(_write(self.mapper.asset_path(name), contents))
        self._asset_version = digest.hexdigest()
        return written

    def _helpers(
        self, from_path: str, *, page_id: int | None = None, profile_id: int | None = None
    ) -> TemplateHelpers:
        return TemplateHelpers(
            self.mapper,
            from_path,
            page_id=page_id,
            profile_id=profile_id,
            asset_version=self._asset_version,
        )

    def _render_profile(self, site_profile: SiteProfile) -> list[Path]:
        profile = site_profile.profile
        profile_id = site_profile.id
        prefix = self.mapper.profile_prefix(profile.name)
        context = PageContext(self.mapper, profile_id)
        pages_by_id = site_profile.pages_by_id()

        written: list[Path] = []
        for page in site_profile.pages:
            info = page.info()
            location = self.mapper.path_for_page(page.id, profile_id=profile_id)
            helpers = self._helpers(location.path, page_id=page.id, profile_id=profile_id)
            html = self.theme.template_for(info.template).render(
                page_id=page.id,
                info=info,
                data=page.data(context),
                crumbs=Breadcrumbs.from_page(page, pages_by_id, profile.title, prefix),
                profile=profile,
                profile_prefix=prefix,
                doc_info=site_profile.dossier.info,
                **helpers.as_globals(),
            )
            written.append(_write(location.disk, html))
            logger.debug("Rendered {}", location.path)

        written.append(self._write_profile_index(site_profile, prefix))
        return written

    def _write_profile_index(self, site_profile: SiteProfile, prefix: str) -> Path:
        profile = site_profile.profile
        url = f"{prefix}{INDEX_FILENAME}"
        sitemap = SiteMap.from_pages(site_profile.pages, profile.title, prefix)
        helpers = self._helpers(url, profile_id=site_profile.id)
        html = self.theme.template_for(Template.INDEX).render(
            sitemap=sitemap,
            profile=profile,
            profile_prefix=prefix,
            description=self.theme.markdown(profile.description or ""),
            stats=site_profile.dossier.stats(),
            doc_info=site_profile.dossier.info,
            crumbs=Breadcrumbs(),
            **helpers.as_globals(),
        )
        return _write(self.config.output_dir / url, html)

    def _write_profiles_index(self) -> Path:
        helpers = self._helpers(INDEX_FILENAME)
        profiles = [
            {
                "title": site_profile.profile.title,
                "url": helpers.link(
                    f"{self.mapper.profile_prefix(site_profile.profile.name)}{INDEX_FILENAME}"
                ),
                "description": self.theme.markdown(site_profile.profile.description or ""),
                "doc_info": site_profile.dossier.info,
            }
            for site_profile in self.profiles
        ]
        html = self.theme.template_for(Template.PROFILES).render(
            profiles=profiles, crumbs=Breadcrumbs(), doc_info=None, **helpers.as_globals()
        )
        return _write(self.config.output_dir / INDEX_FILENAME, html)


def build_site(config: SiteConfig, *, theme: Theme | None = None) -> list[Path]:
    """Process every configured profile and write the site.

    Returns
    -------
    list[Path]
        Every file written.
    """
    generator = SiteGenerator(config, theme)
    for profile in config.profiles:
        generator.add_profile(profile, process_profile(profile, config))
    return generator.generate()


__all__ = ["SiteGenerator", "build_site", "process_profile"]
