"""Shared test fixtures and helpers for sigtable tests.

Provides:
- In-memory scopes: module_loader() builds module objects from source text
- On-disk scopes: scope_package fixture writes importable modules to tmp_path
- CliRunner fixtures: cli_runner, invoke_cli()
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import importlib
import json
import logging
import sys
import textwrap
import types

import pytest
from click.testing import CliRunner

from sigtable.exit_codes import ScopeResolutionError

# ===========================================================================
# In-memory scopes
# ===========================================================================


def make_module(path: str, source: str) -> types.ModuleType:
    """Execute *source* as the body of a module named *path*."""
    module = types.ModuleType(path or "builtins")
    exec(compile(textwrap.dedent(source), f"<{path or 'universe'}>", "exec"), module.__dict__)
    return module


def module_loader(sources: dict[str, str]):
    """Return a scope loader serving modules built from *sources*.

    Unknown paths raise ScopeResolutionError like a failed import.  The
    returned loader records every path it was asked for in ``loader.calls``.
    """
    modules = {path: make_module(path, src) for path, src in sources.items()}

    def loader(path):
        loader.calls.append(path)
        if path not in modules:
            raise ScopeResolutionError(path, "no such module")
        return modules[path]

    loader.calls = []
    return loader


READER_SRC = """\
from typing import Protocol

class {name}(Protocol):
    def read(self, n: int) -> bytes: ...
"""


# ===========================================================================
# On-disk scopes
# ===========================================================================


@pytest.fixture
def scope_package(tmp_path, monkeypatch):
    """Factory writing importable modules under tmp_path.

    Usage: ``scope_package({"sigfx_a": "...", "sigfx_b.sub": "..."})``.
    Dotted names create packages.  Written modules are dropped from
    ``sys.modules`` after the test.
    """
    root = tmp_path / "scopes"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))
    written: list[str] = []

    def _write(files: dict[str, str]):
        for dotted, source in files.items():
            parts = dotted.split(".")
            pkg_dir = root
            for part in parts[:-1]:
                pkg_dir = pkg_dir / part
                pkg_dir.mkdir(exist_ok=True)
                init = pkg_dir / "__init__.py"
                if not init.exists():
                    init.write_text("")
            (pkg_dir / f"{parts[-1]}.py").write_text(textwrap.dedent(source))
            written.append(parts[0])
        importlib.invalidate_caches()
        return root

    yield _write

    for name in list(sys.modules):
        if name.split(".")[0] in written:
            del sys.modules[name]


def write_config(path, scopes) -> str:
    """Write a JSON scope configuration and return its path as a string."""
    path.write_text(json.dumps({"scopes": scopes}), encoding="utf-8")
    return str(path)


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, json_mode=False):
    """Invoke the sigtable CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["generate"])
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from sigtable.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(args)
    return runner.invoke(cli, full_args, catch_exceptions=False)


# ===========================================================================
# JSON validation helpers
# ===========================================================================


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result, failing with context on errors."""
    try:
        return json.loads(result.output)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.output[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the sigtable envelope contract."""
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    assert "command" in data, "Missing 'command' key in envelope"
    assert "version" in data, "Missing 'version' key in envelope"
    assert "summary" in data, "Missing 'summary' key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    assert isinstance(data["summary"], dict)


@pytest.fixture(autouse=True)
def _restore_logging():
    """`sigtable -v` reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
