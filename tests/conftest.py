"""Shared fixtures for pdxdoc tests.

The sample dump mirrors the layout the external parser writes: a string
table, the scope and mask indices to synthesize, and one record per
documented entry.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from loguru import logger

from pdxdoc.config import PaginationMode, ProfileConfig, ProfileGame, SiteConfig
from pdxdoc.dossier import Dossier
from pdxdoc.mapper import SiteMapper, SiteProfile
from pdxdoc.page import GenericListPageBuilder, MaskList, ScopeList
from pdxdoc.providers import Victoria3DocProvider
from pdxdoc.script_docs import parse_script_docs

STRING_TABLE = ["country", "state", "character", "tax_mask", "army_mask"]

TAX_MODIFIERS = [
    "country_tax_income_add",
    "country_tax_income_mult",
    "state_tax_capacity_add",
    "state_tax_waste_mult",
    "country_tax_collection_mult",
]


def _modifier(name: str, mask: int) -> dict[str, typ.Any]:
    return {
        "category": "modifiers",
        "name": name,
        "content": {
            "mask": mask,
            "display_name": name.replace("_", " ").title(),
            "description": [{"type": "text", "contents": f"Changes {name}"}],
        },
    }


@pytest.fixture
def script_docs_payload() -> dict[str, typ.Any]:
    """Return a small but complete script docs dump."""
    return {
        "string_table": list(STRING_TABLE),
        "scopes": [0, 1, 2],
        "masks": [3, 4],
        "entries": [
            {
                "category": "effects",
                "name": "add_loyalists",
                "content": {
                    "description": [
                        {"type": "text", "contents": "Adds loyalists\nto a pop"},
                        {
                            "type": "code",
                            "value": {
                                "object": [
                                    {"key": "value", "value": 5},
                                    {"key": "culture", "value": "cu:french"},
                                ]
                            },
                        },
                    ],
                    "supported_scopes": [0],
                    "supported_targets": [1],
                },
            },
            {
                "category": "effects",
                "name": "add_radicals",
                "content": {
                    "description": "Adds radicals",
                    "supported_scopes": [0, 1],
                },
            },
            {
                "category": "triggers",
                "name": "has_law",
                "content": {"description": "Checks a law", "supported_scopes": [0]},
            },
            {
                "category": "event_targets",
                "name": "capital",
                "content": {
                    "description": "The capital state",
                    "requires_data": False,
                    "global_link": True,
                    "input_scopes": [0],
                    "output_scopes": [1],
                },
            },
            {
                "category": "on_actions",
                "name": "on_monthly_pulse",
                "content": {"expected_scope": 0, "from_code": True},
            },
            {
                "category": "custom_localization",
                "name": "GetName",
                "content": {"scope": 2, "random_valid": True, "entries": ["a", "b"]},
            },
            *(_modifier(name, 3) for name in TAX_MODIFIERS),
            _modifier("unit_offense_mult", 4),
        ],
    }


@pytest.fixture
def script_docs_file(tmp_path: Path, script_docs_payload: dict[str, typ.Any]) -> Path:
    """Write the sample dump to ``script_docs.json``."""
    path = tmp_path / "script_docs.json"
    path.write_bytes(msgspec_json.encode(script_docs_payload))
    return path


@pytest.fixture
def profile(script_docs_file: Path) -> ProfileConfig:
    return ProfileConfig(
        name="vic3",
        title="Victoria 3",
        game=ProfileGame.VICTORIA3,
        script_docs=script_docs_file,
    )


@pytest.fixture
def site_config(tmp_path: Path, profile: ProfileConfig) -> SiteConfig:
    return SiteConfig(
        profiles=[profile],
        output_dir=tmp_path / "public",
        pagination=PaginationMode.absolute(4),
    )


@pytest.fixture
def make_dossier(
    script_docs_payload: dict[str, typ.Any],
) -> typ.Callable[[SiteConfig], Dossier]:
    """Return a factory building a fully populated dossier for a config."""

    def _make(config: SiteConfig) -> Dossier:
        docs = parse_script_docs(msgspec_json.encode(script_docs_payload))
        profile = config.profiles[0]
        dossier = Dossier(
            config,
            Victoria3DocProvider().get_categories(profile),
            docs.string_table,
        )
        dossier.add_entries(docs.entries)
        dossier.add_builder(GenericListPageBuilder(ScopeList, docs.scope_ids))
        dossier.add_builder(GenericListPageBuilder(MaskList, docs.mask_ids))
        return dossier

    return _make


@pytest.fixture
def dossier(site_config: SiteConfig, make_dossier: typ.Callable[[SiteConfig], Dossier]) -> Dossier:
    return make_dossier(site_config)


@pytest.fixture
def sealed_mapper(site_config: SiteConfig, dossier: Dossier) -> tuple[SiteMapper, SiteProfile]:
    """Return a mapper sealed over the sample profile."""
    site_profile = SiteProfile(site_config.profiles[0], dossier, dossier.create_pages())
    mapper = SiteMapper(site_config)
    mapper.record_profile(site_profile)
    mapper.seal()
    return mapper, site_profile


@pytest.fixture
def log_messages() -> typ.Iterator[list[str]]:
    """Capture loguru output as ``LEVEL message`` strings."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(
            f"{message.record['level'].name} {message.record['message']}"
        ),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
