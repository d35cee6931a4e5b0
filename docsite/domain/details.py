# docsite/domain/details.py
"""
Fetching packages and modules for the details pages.

fetch_package_or_module turns a lookup into a status code and an optional
error page; the build_*_page functions pick the tab and fetch the data
shown on it.
"""
from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Dict, List

from loguru import logger

from ..core.errors import NotFoundError, UnknownTabError
from ..core.importpath import in_stdlib
from ..core.versioning import LATEST_VERSION, is_valid_semver
from .datasource import DataSource, package_dir
from .licenses import ROOT_DIR, License, LicenseRecord, are_redistributable, evaluate
from .models import Directory, Package, VersionedPackage, VersionInfo
from .presentation import (
    breadcrumb_path,
    construct_module_url,
    construct_package_url,
    create_module,
    create_package,
    elapsed_time,
    file_source,
    module_title,
    package_suffix,
    package_title,
    suggested_search,
)
from .schemas import (
    DetailsPage,
    DirectoryDetails,
    DirectoryHeader,
    DocumentationDetails,
    ErrorPage,
    ImportedByDetails,
    ImportsDetails,
    LicenseDetail,
    LicensesDetails,
    PackageSummary,
    ReadMeDetails,
    VersionsDetails,
    VersionSummary,
)
from .tabs import DIRECTORY_TAB_SETTINGS, MODULE_TAB_SETTINGS, PACKAGE_TAB_SETTINGS, module_tab, package_tab

PACKAGE_NAMESPACE = "pkg"
MODULE_NAMESPACE = "mod"


@dataclass
class FetchResult:
    status: int
    error_page: ErrorPage | None = None
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status == HTTPStatus.OK


def fetch_package_or_module(
    ds: DataSource,
    namespace: str,
    path: str,
    version: str,
    get: Callable[[str], Any],
) -> FetchResult:
    """
    Fetch a package or module with get(version).

    If the requested version cannot be found, get is called once more with
    the latest version to find out whether any version exists, so that a
    more helpful error page can be shown. Excluded paths are reported as
    not found.
    """
    if version != LATEST_VERSION and not is_valid_semver(version):
        epage = ErrorPage(message=f'"{version}" is not a valid semantic version.')
        if namespace == PACKAGE_NAMESPACE:
            epage.secondary_message = suggested_search(path)
        logger.info("{}@{}: invalid version", path, version)
        return FetchResult(HTTPStatus.BAD_REQUEST, epage)

    try:
        excluded = ds.is_excluded(path)
    except Exception as e:
        logger.error("is_excluded({!r}): {}", path, e)
        return FetchResult(HTTPStatus.INTERNAL_SERVER_ERROR)
    if excluded:
        # Don't let the user know that the path was excluded.
        return FetchResult(HTTPStatus.NOT_FOUND)

    try:
        value = get(version)
    except NotFoundError as e:
        logger.info("fetch_package_or_module({!r}, {!r}, {!r}): {}", namespace, path, version, e)
    except Exception as e:
        logger.error("fetch_package_or_module({!r}, {!r}, {!r}): {}", namespace, path, version, e)
        return FetchResult(HTTPStatus.INTERNAL_SERVER_ERROR)
    else:
        return FetchResult(HTTPStatus.OK, value=value)

    if version == LATEST_VERSION:
        # Nothing exists at any version.
        return FetchResult(HTTPStatus.NOT_FOUND)

    # The requested version is missing, but another one may exist.
    try:
        get(LATEST_VERSION)
    except Exception as e:
        logger.info("get({}, latest) for {}: {}", path, namespace, e)
        return FetchResult(HTTPStatus.NOT_FOUND)

    word = "package"
    url_path = "/" + path
    if namespace == MODULE_NAMESPACE:
        word = "module"
        url_path = "/mod/" + path
    epage = ErrorPage(
        message=f"{word.title()} {path}@{version} is not available.",
        secondary_message=(
            f"There are other versions of this {word} that are! "
            f'To view them, <a href="{url_path}?tab=versions">click here</a>.'
        ),
    )
    return FetchResult(HTTPStatus.SEE_OTHER, epage)


# ---------------- Package tabs ----------------
def fetch_documentation_details(ds: DataSource, pkg: VersionedPackage) -> DocumentationDetails:
    return DocumentationDetails(module_path=pkg.module_path, documentation=pkg.package.documentation_html)


def fetch_readme_details(ds: DataSource, vi: VersionInfo) -> ReadMeDetails:
    return ReadMeDetails(
        module_path=vi.module_path,
        readme_file_path=vi.readme_file_path,
        readme_contents=vi.readme_contents,
    )


def _summaries(
    packages: List[Package], vi: VersionInfo, allowed: frozenset, records: List[LicenseRecord] | None = None
) -> List[PackageSummary]:
    """Each package is judged on the module license files at or above its directory."""
    if records is None:
        records = list(dict.fromkeys(r for p in packages for r in p.licenses))
    return [
        PackageSummary(
            path=p.path,
            suffix=package_suffix(p, vi),
            synopsis=p.synopsis,
            is_redistributable=are_redistributable(
                records, allowed, directory=package_dir(vi.module_path, p.path)
            ),
            url=construct_package_url(p.path, vi.module_path, vi.version),
        )
        for p in packages
    ]


def _module_records(ds: DataSource, vi: VersionInfo) -> List[LicenseRecord]:
    return [lic.record for lic in ds.get_module_licenses(vi.module_path, vi.version)]


def fetch_package_directory_details(
    ds: DataSource, pkg_path: str, vi: VersionInfo, allowed: frozenset
) -> DirectoryDetails:
    packages = [
        p for p in ds.get_packages_in_version(vi.module_path, vi.version)
        if p.path.startswith(pkg_path + "/")
    ]
    return DirectoryDetails(
        module_path=vi.module_path,
        version=vi.version,
        packages=_summaries(packages, vi, allowed, _module_records(ds, vi)),
    )


def fetch_module_directory_details(ds: DataSource, vi: VersionInfo, allowed: frozenset) -> DirectoryDetails:
    packages = ds.get_packages_in_version(vi.module_path, vi.version)
    return DirectoryDetails(
        module_path=vi.module_path,
        version=vi.version,
        packages=_summaries(packages, vi, allowed, _module_records(ds, vi)),
    )


def fetch_package_versions_details(ds: DataSource, pkg: VersionedPackage) -> VersionsDetails:
    versions = ds.get_package_versions(pkg.path)
    return VersionsDetails(versions=[
        VersionSummary(
            version=vi.version,
            module_path=vi.module_path,
            commit_time=elapsed_time(vi.commit_time),
            url=construct_package_url(pkg.path, vi.module_path, vi.version),
        )
        for vi in versions
    ])


def fetch_module_versions_details(ds: DataSource, vi: VersionInfo) -> VersionsDetails:
    versions = ds.get_module_versions(vi.module_path)
    return VersionsDetails(versions=[
        VersionSummary(
            version=v.version,
            module_path=v.module_path,
            commit_time=elapsed_time(v.commit_time),
            url=construct_module_url(v.module_path, v.version),
        )
        for v in versions
    ])


def fetch_imports_details(ds: DataSource, pkg: VersionedPackage) -> ImportsDetails:
    std, external = [], []
    for imp in pkg.package.imports:
        (std if in_stdlib(imp) else external).append(imp)
    return ImportsDetails(module_path=pkg.module_path, imports=sorted(external), std_lib=sorted(std))


def fetch_imported_by_details(ds: DataSource, pkg: VersionedPackage, limit: int) -> ImportedByDetails:
    imported_by = ds.get_imported_by(pkg.path, pkg.module_path, limit)
    total = ds.get_imported_by_count(pkg.path, pkg.module_path)
    return ImportedByDetails(module_path=pkg.module_path, imported_by=imported_by, total=total)


def transform_licenses(
    module_path: str, version: str, licenses: List[License], allowed: frozenset
) -> LicensesDetails:
    return LicensesDetails(
        licenses=[
            LicenseDetail(
                type=lic.type,
                file_path=lic.file_path,
                contents=lic.contents,
                source=file_source(module_path, version, lic.file_path),
            )
            for lic in licenses
        ],
        directories=evaluate(licenses, allowed).directories,
    )


def fetch_package_licenses_details(ds: DataSource, pkg: VersionedPackage, allowed: frozenset) -> LicensesDetails:
    licenses = ds.get_package_licenses(pkg.path, pkg.module_path, pkg.version)
    return transform_licenses(pkg.module_path, pkg.version, licenses, allowed)


def fetch_details_for_package(
    ds: DataSource, tab: str, pkg: VersionedPackage, allowed: frozenset, imported_by_limit: int
) -> Any:
    """Return tab details by delegating to the matching fetcher."""
    fetchers: Dict[str, Callable[[], Any]] = {
        "doc": lambda: fetch_documentation_details(ds, pkg),
        "readme": lambda: fetch_readme_details(ds, pkg.version_info),
        "subdirectories": lambda: fetch_package_directory_details(ds, pkg.path, pkg.version_info, allowed),
        "versions": lambda: fetch_package_versions_details(ds, pkg),
        "imports": lambda: fetch_imports_details(ds, pkg),
        "importedby": lambda: fetch_imported_by_details(ds, pkg, imported_by_limit),
        "licenses": lambda: fetch_package_licenses_details(ds, pkg, allowed),
    }
    if tab not in fetchers:
        raise UnknownTabError(f"BUG: unable to fetch details: unknown tab {tab!r}")
    return fetchers[tab]()


def fetch_details_for_module(
    ds: DataSource, tab: str, vi: VersionInfo, licenses: List[License], allowed: frozenset
) -> Any:
    """Return tab details by delegating to the matching fetcher."""
    fetchers: Dict[str, Callable[[], Any]] = {
        "readme": lambda: fetch_readme_details(ds, vi),
        "packages": lambda: fetch_module_directory_details(ds, vi, allowed),
        "versions": lambda: fetch_module_versions_details(ds, vi),
        "licenses": lambda: transform_licenses(vi.module_path, vi.version, licenses, allowed),
    }
    if tab not in fetchers:
        raise UnknownTabError(f"BUG: unable to fetch details: unknown tab {tab!r}")
    return fetchers[tab]()


# ---------------- Pages ----------------
def build_package_page(
    ds: DataSource,
    pkg: VersionedPackage,
    tab: str | None,
    allowed: frozenset,
    imported_by_limit: int,
    query: str = "",
) -> DetailsPage:
    header = create_package(pkg.package, pkg.version_info, allowed)
    settings = package_tab(tab, header.is_redistributable)
    can_show_details = header.is_redistributable or settings.always_show_details

    details = None
    if can_show_details:
        details = fetch_details_for_package(ds, settings.name, pkg, allowed, imported_by_limit)

    return DetailsPage(
        title=package_title(pkg.package),
        query=query,
        settings=settings,
        header=header,
        breadcrumb_path=breadcrumb_path(header.path, header.module.path, header.module.version),
        details=details,
        can_show_details=can_show_details,
        tabs=list(PACKAGE_TAB_SETTINGS),
        namespace=PACKAGE_NAMESPACE,
    )


def build_module_page(
    ds: DataSource,
    vi: VersionInfo,
    tab: str | None,
    allowed: frozenset,
    query: str = "",
) -> DetailsPage:
    licenses = ds.get_module_licenses(vi.module_path, vi.version)
    settings = module_tab(tab)
    header = create_module(vi, [lic.record for lic in licenses], allowed)
    can_show_details = header.is_redistributable or settings.always_show_details

    details = None
    if can_show_details:
        details = fetch_details_for_module(ds, settings.name, vi, licenses, allowed)

    return DetailsPage(
        title=module_title(vi.module_path),
        query=query,
        settings=settings,
        header=header,
        breadcrumb_path="",
        details=details,
        can_show_details=can_show_details,
        tabs=list(MODULE_TAB_SETTINGS),
        namespace=MODULE_NAMESPACE,
    )


def build_directory_page(directory: Directory, allowed: frozenset, query: str = "") -> DetailsPage:
    """Page for a path that is not a package but holds packages below it."""
    vi = directory.version_info
    # Root license files are shared by every package of the module.
    root_records = list(dict.fromkeys(
        r for p in directory.packages for r in p.licenses if r.directory == ROOT_DIR
    ))
    module = create_module(vi, root_records, allowed)
    settings = DIRECTORY_TAB_SETTINGS[0]
    return DetailsPage(
        title="Directory " + directory.path,
        query=query,
        settings=settings,
        header=DirectoryHeader(
            module=module,
            path=directory.path,
            url=construct_package_url(directory.path, vi.module_path, vi.version),
        ),
        breadcrumb_path=breadcrumb_path(directory.path, vi.module_path, vi.version),
        details=DirectoryDetails(
            module_path=vi.module_path,
            version=vi.version,
            packages=_summaries(directory.packages, vi, allowed),
        ),
        can_show_details=True,
        tabs=list(DIRECTORY_TAB_SETTINGS),
        namespace=PACKAGE_NAMESPACE,
    )
