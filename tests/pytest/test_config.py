# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import logging
import shutil
import subprocess
from logging.handlers import QueueHandler
from pathlib import Path

import platformdirs
import pytest

from taskopts.config import Config, get_config_dirs, load_config_file, setup_logging_from_config


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TASKOPTS_CONFIG", raising=False)


def init_repository(path: Path) -> None:
    subprocess.run(["git", "init", path], check=True)


@pytest.mark.skipif(shutil.which("git") is None, reason="git binary is not available")
def test_config_discovery_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    testrepo = tmp_path.joinpath("testrepo")
    testrepo.mkdir()
    init_repository(testrepo)
    monkeypatch.chdir(testrepo)

    config_file = testrepo.joinpath("taskopts.toml")
    config_file.touch()

    _, path = load_config_file()
    assert path is not None
    assert path.name == "taskopts.toml"

    foodir = testrepo.joinpath("foo")
    foodir.mkdir()
    monkeypatch.chdir(foodir)

    _, path = load_config_file()
    assert path is not None
    assert path.resolve() == config_file.resolve()


def test_config_discovery_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path.joinpath("taskopts.toml")
    config_file.touch()
    monkeypatch.chdir(tmp_path)

    _, path = load_config_file()
    assert path is not None
    assert path.resolve() == config_file.resolve()


def test_config_discovery_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path.joinpath("custom.toml")
    config_file.touch()
    monkeypatch.setenv("TASKOPTS_CONFIG", str(config_file))

    _, path = load_config_file()
    assert path == config_file

    config_file.unlink()
    with pytest.raises(FileNotFoundError):
        load_config_file()


def test_get_config_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    dirs = get_config_dirs()
    assert dirs[0] == Path.cwd()
    assert dirs[-1] == platformdirs.user_config_path("taskopts")


def test_get_value(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path.joinpath("taskopts.toml")
    config_file.write_text(
        """[taskopts.log]
level = "debug"
"""
    )
    monkeypatch.chdir(tmp_path)

    config, _ = load_config_file()

    assert config.get_value("taskopts.log.level") == "debug"
    assert config.get_value("taskopts.log.color") is None
    assert config.get_value("taskopts.log.color", "auto") == "auto"
    assert config.get_value("taskopts.log.level.nested", "x") == "x"


def test_invalid_config(tmp_path: Path) -> None:
    config_file = tmp_path.joinpath("taskopts.toml")
    config_file.write_text(
        """[taskopts.log]
level = debug
"""
    )

    with pytest.raises(ValueError):
        load_config_file(config_file, [tmp_path])


def test_setup_logging_from_config() -> None:
    config = Config({"taskopts": {"log": {"level": "trace", "color": "never"}}})

    setup_logging_from_config(config)

    handlers = logging.getLogger("taskopts").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], QueueHandler)


def test_setup_logging_from_config_invalid() -> None:
    with pytest.raises(ValueError):
        setup_logging_from_config(Config({"taskopts": {"log": {"color": "sometimes"}}}))
