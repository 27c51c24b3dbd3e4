"""Shared test fixtures for fizzy-md tests."""

import json
import logging
import os
import stat
import sys
from pathlib import Path

import pytest

from fizzy_md.cli.config import CONFIG_ENV_VAR, ENV_VARS
from fizzy_md.core.converter import MarkdownConverter
from fizzy_md.core.resolver import ContentResolver
from fizzy_md.core.rewriter import ArgumentRewriter, TempArtifacts

FAKE_FIZZY = """\
import json
import logging
import os
import sys

with open(os.environ["FAKE_FIZZY_ARGS"], "w", encoding="utf-8") as f:
    json.dump(sys.argv[1:], f)
sys.exit(int(os.environ.get("FAKE_FIZZY_EXIT", "0")))
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove fizzy-md settings inherited from the developer's environment."""
    for name in [CONFIG_ENV_VAR, *ENV_VARS.values()]:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def converter() -> MarkdownConverter:
    return MarkdownConverter()


@pytest.fixture
def resolver(converter) -> ContentResolver:
    return ContentResolver(converter)


@pytest.fixture
def artifact_dir(tmp_path) -> Path:
    path = tmp_path / "artifacts"
    path.mkdir()
    return path


@pytest.fixture
def artifacts(artifact_dir) -> TempArtifacts:
    with TempArtifacts(artifact_dir) as registry:
        yield registry


@pytest.fixture
def rewriter(converter, resolver, artifacts) -> ArgumentRewriter:
    return ArgumentRewriter(converter, resolver, artifacts)


@pytest.fixture
def make_executable():
    """Return a helper that writes a script and marks it executable."""

    def write(path: Path, body: str, interpreter: str = "/bin/sh") -> Path:
        path.write_text(f"#!{interpreter}\n{body}\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return write


@pytest.fixture
def fake_fizzy(tmp_path, monkeypatch, make_executable):
    """Install a fake `fizzy` on PATH that records its arguments.

    The script dumps its arguments as JSON to the file named by
    FAKE_FIZZY_ARGS and exits with FAKE_FIZZY_EXIT (default 0). Returns a
    function that reads the recorded arguments back.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    args_file = tmp_path / "fizzy-args.json"
    make_executable(bin_dir / "fizzy", FAKE_FIZZY, interpreter=sys.executable)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    monkeypatch.setenv("FAKE_FIZZY_ARGS", str(args_file))

    def recorded_args() -> list[str]:
        return json.loads(args_file.read_text(encoding="utf-8"))

    return recorded_args


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging during a test."""
    yield
    logger = logging.getLogger("fizzy_md")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
