"""
Tests for building package, module and directory pages.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from docsite.core.errors import UnknownTabError
from docsite.core.versioning import LATEST_VERSION
from docsite.domain.details import (
    build_directory_page,
    build_module_page,
    build_package_page,
    fetch_details_for_module,
    fetch_details_for_package,
)
from docsite.domain.licenses import License
from docsite.domain.models import ModuleVersion, Package, VersionInfo
from docsite.domain.schemas import (
    DirectoryDetails,
    DocumentationDetails,
    ImportedByDetails,
    ImportsDetails,
    LicensesDetails,
    ReadMeDetails,
    VersionsDetails,
)

ALLOWED = frozenset({"MIT", "BSD-3-Clause", "Apache-2.0"})


def package(ds, path):
    return ds.get_package(path, LATEST_VERSION)


class TestPackagePage:
    def test_default_tab_for_redistributable_package(self, ds):
        page = build_package_page(ds, package(ds, "github.com/acme/tools"), None, ALLOWED, 100)

        assert page.settings.name == "doc"
        assert page.can_show_details
        assert isinstance(page.details, DocumentationDetails)
        assert page.details.documentation == "<p>tools docs</p>"
        assert page.title == "Package tools"
        assert page.namespace == "pkg"
        assert [t.name for t in page.tabs][0] == "doc"
        assert "DetailsHeader-breadcrumbCurrent" in page.breadcrumb_path

    def test_default_tab_for_non_redistributable_package(self, ds):
        page = build_package_page(ds, package(ds, "github.com/acme/tools/cmd/run"), "", ALLOWED, 100)

        assert page.settings.name == "subdirectories"
        assert page.can_show_details
        assert isinstance(page.details, DirectoryDetails)
        assert page.title == "Command run"

    def test_hidden_tab_omits_details(self, ds):
        page = build_package_page(ds, package(ds, "github.com/acme/tools/cmd/run"), "doc", ALLOWED, 100)

        assert page.settings.name == "doc"
        assert page.can_show_details is False
        assert page.details is None
        assert page.header.path == "github.com/acme/tools/cmd/run"

    def test_no_license_package_hides_readme(self, ds):
        page = build_package_page(ds, package(ds, "github.com/acme/closed"), "readme", ALLOWED, 100)

        assert page.header.is_redistributable is False
        assert page.details is None

    @pytest.mark.parametrize(
        "tab, details_type",
        [
            ("readme", ReadMeDetails),
            ("subdirectories", DirectoryDetails),
            ("versions", VersionsDetails),
            ("imports", ImportsDetails),
            ("importedby", ImportedByDetails),
            ("licenses", LicensesDetails),
        ],
    )
    def test_each_tab_fetches_its_details(self, ds, tab, details_type):
        page = build_package_page(ds, package(ds, "github.com/acme/tools"), tab, ALLOWED, 100)

        assert page.settings.name == tab
        assert isinstance(page.details, details_type)

    def test_subdirectories_lists_nested_packages(self, ds):
        page = build_package_page(ds, package(ds, "github.com/acme/tools"), "subdirectories", ALLOWED, 100)

        summaries = {p.suffix: p for p in page.details.packages}
        assert set(summaries) == {"cmd/run", "strs"}
        assert summaries["strs"].is_redistributable is True
        assert summaries["cmd/run"].is_redistributable is False
        assert summaries["strs"].url == "/github.com/acme/tools@v1.1.0/strs"

    def test_imports_split_stdlib(self, ds):
        page = build_package_page(ds, package(ds, "github.com/acme/tools"), "imports", ALLOWED, 100)

        assert page.details.std_lib == ["fmt"]
        assert page.details.imports == ["github.com/other/lib"]

    def test_licenses_have_sources(self, ds):
        page = build_package_page(ds, package(ds, "github.com/acme/tools"), "licenses", ALLOWED, 100)

        assert [lic.source for lic in page.details.licenses] == ["github.com/acme/tools@v1.1.0/LICENSE"]

    def test_fetch_error_propagates(self, ds):
        broken = MagicMock(wraps=ds)
        broken.get_package_versions.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            build_package_page(broken, package(ds, "github.com/acme/tools"), "versions", ALLOWED, 100)

    def test_unknown_tab_is_a_bug(self, ds):
        with pytest.raises(UnknownTabError):
            fetch_details_for_package(ds, "packages", package(ds, "github.com/acme/tools"), ALLOWED, 100)


class TestModulePage:
    def test_non_redistributable_module_hides_readme(self, ds):
        vi = ds.get_version_info("github.com/acme/tools", LATEST_VERSION)
        page = build_module_page(ds, vi, None, ALLOWED)

        assert page.settings.name == "readme"
        assert page.header.is_redistributable is False
        assert page.can_show_details is False
        assert page.details is None
        assert page.title == "Module github.com/acme/tools"
        assert page.namespace == "mod"
        assert page.breadcrumb_path == ""

    def test_always_shown_tab(self, ds):
        vi = ds.get_version_info("github.com/acme/tools", LATEST_VERSION)
        page = build_module_page(ds, vi, "versions", ALLOWED)

        assert page.can_show_details
        assert [v.url for v in page.details.versions] == [
            "/mod/github.com/acme/tools@v1.1.0",
            "/mod/github.com/acme/tools@v1.0.0",
        ]

    def test_stdlib_module(self, ds):
        vi = ds.get_version_info("std", LATEST_VERSION)
        page = build_module_page(ds, vi, "licenses", ALLOWED)

        assert page.title == "Standard library"
        assert page.header.url == "/std@v1.13.0"
        assert page.details.licenses[0].source.endswith("/+/refs/tags/go1.13/LICENSE")

    def test_packages_tab(self, ds):
        vi = ds.get_version_info("std", LATEST_VERSION)
        page = build_module_page(ds, vi, "packages", ALLOWED)

        assert [p.path for p in page.details.packages] == ["fmt", "net/http"]

    def test_unknown_tab_is_a_bug(self, ds):
        vi = ds.get_version_info("std", LATEST_VERSION)
        with pytest.raises(UnknownTabError):
            fetch_details_for_module(ds, "doc", vi, [], ALLOWED)


def test_directory_page(ds):
    directory = ds.get_directory("github.com/acme/tools/cmd", LATEST_VERSION)
    page = build_directory_page(directory, ALLOWED)

    assert page.settings.template_name == "directory.tmpl"
    assert page.header.path == "github.com/acme/tools/cmd"
    assert page.header.module.is_redistributable is True
    assert [p.path for p in page.details.packages] == ["github.com/acme/tools/cmd/run"]


def test_template_data_serializes_details(ds):
    page = build_package_page(ds, package(ds, "github.com/acme/tools"), "doc", ALLOWED, 100)
    data = page.to_template_data()

    assert data["details"] == {"module_path": "github.com/acme/tools", "documentation": "<p>tools docs</p>"}
    assert data["header"]["module"]["path"] == "github.com/acme/tools"
    assert data["settings"]["name"] == "doc"


class TestLicensesTab:
    def test_package_licenses_report_directories(self, ds):
        pkg = package(ds, "github.com/acme/tools/cmd/run")
        details = fetch_details_for_package(ds, "licenses", pkg, ALLOWED, 100)

        assert details.directories == {".": True, "cmd": False}

    def test_module_licenses_report_directories(self, ds):
        vi = ds.get_version_info("std", LATEST_VERSION)
        page = build_module_page(ds, vi, "licenses", ALLOWED)

        assert page.details.directories == {".": True}


def test_imported_by_total_is_not_capped(ds):
    page = build_package_page(ds, package(ds, "github.com/acme/tools"), "importedby", ALLOWED, 0)

    assert page.details.imported_by == []
    assert page.details.total == 1


def test_module_packages_judged_by_their_directory(ds):
    vi = ds.get_version_info("github.com/acme/tools", "v1.0.0")
    page = build_module_page(ds, vi, "packages", ALLOWED)

    verdicts = {p.path: p.is_redistributable for p in page.details.packages}
    assert verdicts == {
        "github.com/acme/tools": True,
        "github.com/acme/tools/cmd/run": False,
        "github.com/acme/tools/strs": True,
    }


def test_naive_commit_time_renders(ds):
    ds.add(ModuleVersion(
        VersionInfo(module_path="example.com/naive", version="v1.0.0", commit_time=datetime(2019, 1, 1)),
        [Package(path="example.com/naive", name="naive")],
        [License(type="MIT", file_path="LICENSE")],
    ))

    page = build_package_page(ds, package(ds, "example.com/naive"), "versions", ALLOWED, 100)

    assert page.header.module.commit_time == "Jan  1, 2019"
    assert page.details.versions[0].commit_time == "Jan  1, 2019"
