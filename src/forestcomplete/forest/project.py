"""Project layout: root folder, ``forest.toml``, templates and prefixes."""

from __future__ import annotations

import logging
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Sequence

from forestcomplete.config import ForesterSettings

LOGGER = logging.getLogger(__name__)

NO_TEMPLATE = "(No template)"
DEFAULT_TREES_DIR = "trees"
TEMPLATES_DIR = "templates"
TREE_SUFFIX = ".tree"
PREFIX_PATTERN = re.compile(r"^[a-zA-Z0-9-]+$")


class ProjectError(Exception):
    """Raised when the open folders don't form a usable forest project."""


def resolve_root(folders: Sequence[Path]) -> Path:
    """Return the single project root among the open folders."""
    if not folders:
        raise ProjectError("forestcomplete doesn't support opening a single file.")
    if len(folders) != 1:
        LOGGER.warning("forestcomplete only supports one project folder, using %s", folders[0])
    return Path(folders[0])


def load_forest_config(root: Path, settings: ForesterSettings) -> Dict[str, Any]:
    """Parse the project's forest.toml (or the configured file)."""
    config_path = root / settings.config_file_name
    with config_path.open("rb") as handle:
        return tomllib.load(handle)


def _forest_section(root: Path, settings: ForesterSettings) -> Dict[str, Any]:
    section = load_forest_config(root, settings).get("forest")
    return section if isinstance(section, dict) else {}


def tree_directories(root: Path, settings: ForesterSettings) -> List[str]:
    try:
        trees = _forest_section(root, settings).get("trees")
    except (OSError, tomllib.TOMLDecodeError) as exc:
        LOGGER.error(
            "Failed to read %s, defaulting to '%s' directory: %s",
            settings.config_file_name,
            DEFAULT_TREES_DIR,
            exc,
        )
        return [DEFAULT_TREES_DIR]
    return list(trees) if trees else [DEFAULT_TREES_DIR]


def root_tree_directory(root: Path, settings: ForesterSettings) -> Path:
    """Directory new trees go to when no destination is given."""
    return root / tree_directories(root, settings)[0]


def configured_prefixes(root: Path, settings: ForesterSettings) -> List[str]:
    try:
        prefixes = _forest_section(root, settings).get("prefixes")
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ProjectError(f"Unable to read {settings.config_file_name}: {exc}") from exc
    return [str(prefix) for prefix in prefixes or ()]


def available_templates(root: Path) -> List[str]:
    """Template names under ``templates/``, followed by :data:`NO_TEMPLATE`."""
    templates_dir = root / TEMPLATES_DIR
    templates: List[str] = []
    if templates_dir.is_dir():
        templates = sorted(
            child.name[: -len(TREE_SUFFIX)]
            for child in templates_dir.iterdir()
            if child.is_file() and child.name.endswith(TREE_SUFFIX)
        )
    templates.append(NO_TEMPLATE)
    return templates


def resolve_template(settings: ForesterSettings, chosen: str | None = None) -> str | None:
    """Template to pass to ``forester new``, or ``None`` for no template.

    A configured default template takes precedence over ``chosen``.
    """
    template = settings.default_template or chosen
    if not template or template == NO_TEMPLATE:
        return None
    return template


def validate_prefix(value: str | None) -> str | None:
    """Return an error message for an unusable prefix, else ``None``."""
    if not value:
        return "Prefix cannot be empty"
    if not PREFIX_PATTERN.match(value):
        return "Prefix should only contain letters, numbers, and hyphens"
    return None


def resolve_prefix(settings: ForesterSettings, chosen: str | None = None) -> str | None:
    return chosen or settings.default_prefix or None
