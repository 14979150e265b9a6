# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Discovery and access of the ``taskopts.toml`` configuration file.

The first match wins, in this order:

1. the file named by the ``TASKOPTS_CONFIG`` environment variable
2. ``taskopts.toml`` in the current working directory
3. ``taskopts.toml`` in the root of the enclosing git repository
4. ``taskopts.toml`` in the user configuration directory
"""

import os
import subprocess
import tomllib
from pathlib import Path
from typing import Any

from platformdirs import user_config_path

from taskopts.log import ColorMode, Loglevel, get_logger, setup_logging

logger = get_logger(__name__)

CONFIG_ENV = "TASKOPTS_CONFIG"
CONFIG_FILENAME = Path("taskopts.toml")


class Config(dict[str, Any]):
    """The parsed configuration file; nested tables are plain dicts."""

    def get_value(self, key: str, default: Any | None = None) -> Any | None:
        """Looks up a dotted key such as ``taskopts.log.level``.

        `default` is returned if any part of the key is missing or if an
        intermediate part is not a table.
        """
        node: Any = self
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]

        return node if node is not None else default


def get_git_root() -> Path | None:
    try:
        p = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            check=True,
            text=True,
        )
    except (FileNotFoundError, subprocess.CalledProcessError):
        return None
    return Path(p.stdout.strip())


def get_config_dirs() -> list[Path]:
    dirs = [Path.cwd()]
    if (git_root := get_git_root()) is not None:
        dirs.append(git_root)
    dirs.append(user_config_path("taskopts"))
    return dirs


def search_config(
    filename: Path | None = None,
    extra_paths: list[Path] | None = None,
) -> Path | None:
    if (env_path := os.getenv(CONFIG_ENV)) is not None:
        path = Path(env_path)
        if not path.exists():
            raise FileNotFoundError(env_path)
        return path

    name = filename if filename is not None else CONFIG_FILENAME
    for dir_ in [*get_config_dirs(), *(extra_paths or [])]:
        if (path := dir_.joinpath(name)).exists():
            return path

    return None


def load_config_file(
    filename: Path | None = None,
    extra_paths: list[Path] | None = None,
) -> tuple[Config, Path | None]:
    path = search_config(filename, extra_paths)
    if path is None:
        return Config(), None

    logger.debug(f"loading config from {path}")
    return Config(tomllib.loads(path.read_text())), path


def setup_logging_from_config(config: Config) -> None:
    """Configures logging from the ``[taskopts.log]`` table.

    Recognized keys are ``level`` (a loglevel name or number) and
    ``color`` (one of ``always``, ``auto`` or ``never``). Missing keys
    fall back to the defaults of :func:`taskopts.log.setup_logging`.
    """
    level = None
    if (raw_level := config.get_value("taskopts.log.level")) is not None:
        level = Loglevel.from_str(str(raw_level))

    color_mode = ColorMode(config.get_value("taskopts.log.color", ColorMode.AUTO.value))
    setup_logging(level, color_mode)
