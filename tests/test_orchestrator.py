"""Tests for the extraction orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from likhis.config import HTTP_METHODS
from likhis.core.errors import PluginNotFoundError, TraversalError
from likhis.extractors import Route, extract_file, extract_routes
from likhis.plugins import PluginRegistry

EXPRESS_SOURCE = """\
const express = require('express');
const router = express.Router();

router.get('/users', (req, res) => {
  res.json({ users: [] });
});

router.post('/users/:id', (req, res) => {
  const userId = req.params.id;
  const { name, email } = req.body;
  res.json({ id: userId });
});

app.get('/products', (req, res) => {
  const page = req.query.page;
  res.json({ products: [] });
});
"""

LARAVEL_SOURCE = """\
<?php

use Illuminate\\Support\\Facades\\Route;

Route::get('/users', function () {
    return response()->json(['users' => []]);
});

Route::post('/users/{id}', function ($id) {
    return response()->json(['id' => $id]);
});
"""

PYTHON_SOURCE = """\
@app.get("/items/{item_id}")
async def read_item(item_id: int):
    return {"item_id": item_id}
"""


def _pairs(routes: list[Route]) -> list[tuple[str, str]]:
    return [(r.method, r.path) for r in routes]


class TestExplicitFramework:
    """A named plugin applied to every traversed file."""

    def test_express_routes(self, sample_registry: PluginRegistry, write_source) -> None:
        path = write_source("routes.js", EXPRESS_SOURCE)

        routes = extract_routes(path.parent, sample_registry, "express")

        assert _pairs(routes) == [
            ("GET", "/users"),
            ("POST", "/users/:id"),
            ("GET", "/products"),
        ]
        assert routes[1].params == ["id"]
        assert routes[1].body == ["name", "email"]
        assert routes[2].query == ["page"]

    def test_laravel_routes(self, sample_registry: PluginRegistry, write_source) -> None:
        path = write_source("routes/web.php", LARAVEL_SOURCE)

        routes = extract_routes(path.parent, sample_registry, "laravel")

        assert _pairs(routes) == [("GET", "/users"), ("POST", "/users/{id}")]
        assert routes[1].params == ["id"]

    def test_explicit_plugin_ignores_extension(
        self, sample_registry: PluginRegistry, write_source
    ) -> None:
        """The express plugin still runs over a .py file when named explicitly."""
        path = write_source("weird.py", "router.get('/from-python', h)\n")

        routes = extract_routes(path.parent, sample_registry, "express")

        assert _pairs(routes) == [("GET", "/from-python")]
        assert routes[0].plugin == "express"

    def test_unknown_framework_raises(
        self, sample_registry: PluginRegistry, project_dir: Path
    ) -> None:
        with pytest.raises(PluginNotFoundError):
            extract_routes(project_dir, sample_registry, "rails")


class TestAutoMode:
    """Plugins selected per file by extension."""

    def test_each_file_uses_its_plugin(
        self, sample_registry: PluginRegistry, write_source
    ) -> None:
        write_source("server.js", "router.get('/js-route', h)\n")
        write_source("api.py", PYTHON_SOURCE)

        routes = extract_routes(write_source("README.md", "").parent, sample_registry)

        by_plugin = {r.plugin: r for r in routes}
        assert len(routes) == 2
        assert by_plugin["pyroutes"].path == "/items/{item_id}"
        assert by_plugin["pyroutes"].params == ["item_id"]
        assert by_plugin["express"].path == "/js-route"

    def test_file_order_follows_traversal(
        self, sample_registry: PluginRegistry, write_source
    ) -> None:
        write_source("z/deep/late.js", "app.get('/deep', h)\n")
        write_source("b.php", "Route::get('/php', fn() => 1);\n")
        root = write_source("a.js", "app.get('/a', h)\n").parent

        routes = extract_routes(root, sample_registry, "auto")

        assert [r.path for r in routes] == ["/a", "/php", "/deep"]

    def test_overlapping_extensions_union(
        self, sample_registry: PluginRegistry, write_source
    ) -> None:
        """Two plugins claiming .js both run; duplicates are surfaced."""
        express = sample_registry["express"]
        twin = type(express)(
            name="twin",
            extensions=express.extensions,
            patterns=express.patterns,
        )
        registry = PluginRegistry({"express": express, "twin": twin})
        root = write_source("app.js", "app.get('/dup', h)\n").parent

        routes = extract_routes(root, registry)

        assert [(r.plugin, r.path) for r in routes] == [
            ("express", "/dup"),
            ("twin", "/dup"),
        ]

    def test_files_without_routes_contribute_nothing(
        self, sample_registry: PluginRegistry, write_source
    ) -> None:
        root = write_source("util.js", "module.exports = {};\n").parent
        assert extract_routes(root, sample_registry) == []


class TestInvariants:
    """Properties that hold for any extraction."""

    @pytest.fixture
    def mixed_tree(self, write_source) -> Path:
        write_source("routes.js", EXPRESS_SOURCE)
        write_source("web/routes.php", LARAVEL_SOURCE)
        write_source("svc/api.py", PYTHON_SOURCE)
        write_source("node_modules/pkg/index.js", "app.get('/vendored', h)\n")
        return write_source("extra/all.js", "app.all('/ignored', h)\n").parent.parent

    def test_methods_canonical_and_paths_non_empty(
        self, sample_registry: PluginRegistry, mixed_tree: Path
    ) -> None:
        routes = extract_routes(mixed_tree, sample_registry)

        assert routes
        for route in routes:
            assert route.method in HTTP_METHODS
            assert route.path

    def test_ignored_directories_never_scanned(
        self, sample_registry: PluginRegistry, mixed_tree: Path
    ) -> None:
        routes = extract_routes(mixed_tree, sample_registry)
        assert "/vendored" not in {r.path for r in routes}

    def test_idempotent(self, sample_registry: PluginRegistry, mixed_tree: Path) -> None:
        first = extract_routes(mixed_tree, sample_registry)
        second = extract_routes(mixed_tree, sample_registry)
        assert first == second

    def test_worker_pool_preserves_order(
        self, sample_registry: PluginRegistry, mixed_tree: Path
    ) -> None:
        sequential = extract_routes(mixed_tree, sample_registry, workers=1)
        pooled = extract_routes(mixed_tree, sample_registry, workers=4)
        assert pooled == sequential

    def test_missing_root_raises(self, sample_registry: PluginRegistry, tmp_path: Path) -> None:
        with pytest.raises(TraversalError):
            extract_routes(tmp_path / "missing", sample_registry)


class TestExtractFile:
    """Single-file extraction."""

    def test_unreadable_file_skipped(
        self, sample_registry: PluginRegistry, tmp_path: Path
    ) -> None:
        missing = tmp_path / "gone.js"
        assert extract_file(missing, [sample_registry["express"]]) == []

    def test_invalid_utf8_replaced(
        self, sample_registry: PluginRegistry, tmp_path: Path
    ) -> None:
        path = tmp_path / "latin1.js"
        path.write_bytes(b"// caf\xe9\napp.get('/menu', h)\n")

        routes = extract_file(path, [sample_registry["express"]])

        assert _pairs(routes) == [("GET", "/menu")]
        assert routes[0].line_number == 2
