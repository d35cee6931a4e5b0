"""
Shared fixtures: a small in-memory catalogue of modules.

    github.com/acme/tools   v1.0.0, v1.1.0   MIT at the root, AGPL in cmd/
    github.com/acme/closed  v0.1.0           no license files at all
    github.com/banned/pkg   v1.0.0           excluded
    std                     v1.13.0          BSD-3-Clause
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from docsite import deps
from docsite.domain.datasource import InMemoryDataSource
from docsite.domain.licenses import License
from docsite.domain.models import ModuleVersion, Package, VersionInfo
from docsite.main import app

ALLOWED = frozenset({"MIT", "BSD-3-Clause", "Apache-2.0"})

NOW = datetime.now(timezone.utc)


def _tools(version: str, days_ago: int) -> ModuleVersion:
    vi = VersionInfo(
        module_path="github.com/acme/tools",
        version=version,
        commit_time=NOW - timedelta(days=days_ago),
        repository_url="https://github.com/acme/tools",
        readme_file_path="README.md",
        readme_contents="# tools",
    )
    packages = [
        Package(
            path="github.com/acme/tools",
            name="tools",
            synopsis="Package tools is a toolbox.",
            documentation_html="<p>tools docs</p>",
            imports=["fmt", "github.com/other/lib"],
        ),
        Package(path="github.com/acme/tools/strs", name="strs", synopsis="String helpers."),
        Package(path="github.com/acme/tools/cmd/run", name="main", synopsis="Command run."),
    ]
    licenses = [
        License(type="MIT", file_path="LICENSE", contents="MIT License"),
        License(type="AGPL-3.0", file_path="cmd/LICENSE", contents="AGPL"),
    ]
    return ModuleVersion(vi, packages, licenses)


def build_datasource() -> InMemoryDataSource:
    closed = ModuleVersion(
        VersionInfo(module_path="github.com/acme/closed", version="v0.1.0", commit_time=NOW - timedelta(days=30)),
        [Package(path="github.com/acme/closed", name="closed", documentation_html="<p>secret</p>")],
        [],
    )
    std = ModuleVersion(
        VersionInfo(module_path="std", version="v1.13.0", commit_time=NOW - timedelta(hours=2)),
        [
            Package(path="fmt", name="fmt", synopsis="Package fmt implements formatted I/O."),
            Package(path="net/http", name="http"),
        ],
        [License(type="BSD-3-Clause", file_path="LICENSE", contents="BSD")],
    )
    importer = ModuleVersion(
        VersionInfo(module_path="github.com/other/app", version="v2.0.0", commit_time=NOW),
        [Package(path="github.com/other/app", name="app", imports=["github.com/acme/tools"])],
        [License(type="Apache-2.0", file_path="LICENSE")],
    )
    banned = ModuleVersion(
        VersionInfo(module_path="github.com/banned/pkg", version="v1.0.0", commit_time=NOW),
        [Package(path="github.com/banned/pkg", name="pkg")],
        [License(type="MIT", file_path="LICENSE")],
    )
    return InMemoryDataSource(
        [_tools("v1.0.0", 10), _tools("v1.1.0", 3), closed, std, importer, banned],
        excluded=["github.com/banned"],
    )


@pytest.fixture
def ds():
    return build_datasource()


@pytest.fixture
def client(ds):
    app.dependency_overrides[deps.get_ds] = lambda: ds
    app.dependency_overrides[deps.get_allowed_licenses] = lambda: ALLOWED
    yield TestClient(app)
    app.dependency_overrides.clear()
