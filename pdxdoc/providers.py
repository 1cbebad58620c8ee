"""Per-game providers of categories, script docs and version information."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from loguru import logger

from ._constants import GENERATOR_LABEL
from .config.models import ProfileGame
from .entry import DocCategory, ScriptDocCategory
from .errors import ProviderError
from .script_docs import ScriptDocs, load_script_docs

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import ProfileConfig

VERSION_PATTERN = re.compile(r"(\d+\.\d+\.\d+)\s*$")
MIN_REVISION_LENGTH = 32
SHORT_REVISION_LENGTH = 9


@dc.dataclass(frozen=True, slots=True)
class GameVersion:
    """Version of a game install, such as ``1.7.1``."""

    version_number: str
    detailed: str


@dc.dataclass(frozen=True, slots=True)
class DocInfo:
    """Build metadata shown in page footers."""

    version: GameVersion | None = None
    generator: str = GENERATOR_LABEL


class BranchRevParser:
    """Read ``<prefix>_branch.txt``/``_rev.txt`` and the engine's equivalents."""

    @staticmethod
    def parse(root: Path, prefix: str) -> GameVersion:
        """Build a GameVersion from the branch and revision files in ``root``.

        Raises
        ------
        FileNotFoundError
            If any of the four files is missing.
        ProviderError
            If a revision is too short or the branch names no version.
        """
        game_branch = (root / f"{prefix}_branch.txt").read_text(encoding="utf-8").strip()
        game_rev = (root / f"{prefix}_rev.txt").read_text(encoding="utf-8").strip()
        engine_branch = (root / "clausewitz_branch.txt").read_text(encoding="utf-8").strip()
        engine_rev = (root / "clausewitz_rev.txt").read_text(encoding="utf-8").strip()

        if len(engine_rev) < MIN_REVISION_LENGTH:
            msg = "invalid revision in clausewitz_rev.txt"
            raise ProviderError(msg)
        if len(game_rev) < MIN_REVISION_LENGTH:
            msg = f"invalid revision in {prefix}_rev.txt"
            raise ProviderError(msg)

        match = VERSION_PATTERN.search(game_branch)
        if match is None:
            msg = f"can't get version number from {prefix}_branch.txt"
            raise ProviderError(msg)

        detailed = (
            f"game version {game_branch} commit {game_rev[:SHORT_REVISION_LENGTH]}\n"
            f"clausewitz version {engine_branch} commit {engine_rev[:SHORT_REVISION_LENGTH]}"
        )
        return GameVersion(match.group(1), detailed)


class GameDocProvider(typ.Protocol):
    """What the build needs from a supported game."""

    def read_script_docs(self, profile: ProfileConfig) -> ScriptDocs | None: ...

    def read_version_info(self, profile: ProfileConfig) -> GameVersion | None: ...

    def get_categories(self, profile: ProfileConfig) -> list[DocCategory]: ...


class Victoria3DocProvider:
    """Provider for Victoria 3 installs."""

    branch_prefix = "caligula"

    def read_script_docs(self, profile: ProfileConfig) -> ScriptDocs | None:
        path = profile.script_docs
        if not path.is_file():
            logger.warning(
                "Tried to read Victoria 3 script docs at {} but no such file exists", path
            )
            return None
        return load_script_docs(path)

    def read_version_info(self, profile: ProfileConfig) -> GameVersion | None:
        root = profile.game_data_dir
        if root is None:
            logger.info("No game data directory for profile {}; skipping version info", profile.name)
            return None
        try:
            return BranchRevParser.parse(root, self.branch_prefix)
        except FileNotFoundError as exc:
            logger.warning("Version files missing in {}: {}", root, exc)
            return None

    def get_categories(self, profile: ProfileConfig) -> list[DocCategory]:  # noqa: ARG002
        return [
            DocCategory.for_tag(
                ScriptDocCategory.CUSTOM_LOCALIZATION, "custom_loc", "Custom Localization"
            ),
            DocCategory.for_tag(ScriptDocCategory.EFFECTS, "effects", "Effects"),
            DocCategory.for_tag(ScriptDocCategory.EVENT_TARGETS, "event_targets", "Event Targets"),
            DocCategory.for_tag(ScriptDocCategory.MODIFIERS, "modifiers", "Modifiers"),
            DocCategory.for_tag(ScriptDocCategory.ON_ACTIONS, "on_actions", "On Actions"),
            DocCategory.for_tag(ScriptDocCategory.TRIGGERS, "triggers", "Triggers"),
        ]


def provider_for_game(game: ProfileGame) -> GameDocProvider:
    """Return the provider for ``game``."""
    match game:
        case ProfileGame.VICTORIA3:
            return Victoria3DocProvider()
        case _:
            msg = f"No documentation provider for {game!r}."
            raise ProviderError(msg)


__all__ = [
    "BranchRevParser",
    "DocInfo",
    "GameDocProvider",
    "GameVersion",
    "Victoria3DocProvider",
    "provider_for_game",
]
