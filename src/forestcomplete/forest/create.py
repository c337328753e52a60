"""Create new trees with ``forester new``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from forestcomplete.config import ForesterSettings
from forestcomplete.process.command import CommandExecutor

LOGGER = logging.getLogger(__name__)


def new_tree_args(
    dest: Path, prefix: str, template: str | None = None, random: bool = False
) -> List[str]:
    args = ["new", "--dest", str(dest), "--prefix", prefix]
    if template:
        args.append(f"--template={template}")
    if random:
        args.append("--random")
    return args


async def create_tree(
    executor: CommandExecutor,
    settings: ForesterSettings,
    root: Path,
    dest: Path,
    prefix: str,
    template: str | None = None,
) -> Path | None:
    """Create a tree under ``dest`` and return the path forester printed.

    ``None`` means no tree was created; the executor has already told the
    user why.
    """
    args = settings.with_config(new_tree_args(dest, prefix, template, settings.random))
    output = await executor.execute(settings.path, args, root)
    result = (output or "").strip()
    if not result:
        LOGGER.info("forester new did not report a created tree")
        return None
    path = Path(result)
    return path if path.is_absolute() else root / path
