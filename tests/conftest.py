"""Shared fixtures: plugin file factories and the built-in registry."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from likhis.config import BUILTIN_PLUGINS_DIR
from likhis.plugins import PluginRegistry, load_plugins

EXPRESS_PLUGIN = r"""
name: express
description: Express-style routers
extensions:
  - .js
patterns:
  - method: ""
    route_regex: |-
      \b(?:app|router)\.(get|post|put|patch|delete)\(\s*['"]([^'"]+)['"]
    param_regex: ':(\w+)'
query_regex:
  - 'req\.query\.(\w+)'
body_regex:
  - 'req\.body\.(\w+)'
  - 'const\s*\{([^}]*)\}\s*=\s*req\.body\b'
"""

LARAVEL_PLUGIN = r"""
name: laravel
description: Laravel route facade
extensions:
  - .php
patterns:
  - method: ""
    route_regex: |-
      Route::(get|post|put|patch|delete)\(\s*['"]([^'"]+)['"]
    param_regex: '\{(\w+)\??\}'
"""

PYTHON_PLUGIN = r"""
name: pyroutes
description: FastAPI-style decorators
extensions:
  - .py
patterns:
  - method: ""
    route_regex: |-
      @\w+\.(get|post)\(\s*['"]([^'"]+)['"]
    param_regex: '\{(\w+)\}'
"""


@pytest.fixture
def write_plugin(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a plugin file into tmp_path/plugins and return its path."""
    plugins_dir = tmp_path / "plugins"
    plugins_dir.mkdir(exist_ok=True)

    def _write(file_name: str, content: str) -> Path:
        path = plugins_dir / file_name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a source file under tmp_path/project and return its path."""
    project = tmp_path / "project"
    project.mkdir(exist_ok=True)

    def _write(rel_path: str, content: str) -> Path:
        path = project / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir(exist_ok=True)
    return project


@pytest.fixture
def sample_registry(write_plugin: Callable[[str, str], Path]) -> PluginRegistry:
    """Registry with express (.js), laravel (.php) and pyroutes (.py)."""
    path = write_plugin("express.yml", EXPRESS_PLUGIN)
    write_plugin("laravel.yml", LARAVEL_PLUGIN)
    write_plugin("pyroutes.yml", PYTHON_PLUGIN)
    registry, _ = load_plugins([path.parent])
    return registry


@pytest.fixture(scope="session")
def builtin_registry() -> PluginRegistry:
    registry, _ = load_plugins([BUILTIN_PLUGINS_DIR])
    return registry
