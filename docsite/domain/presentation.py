# docsite/domain/presentation.py
"""Helpers that turn fetched metadata into what the page templates show."""
from __future__ import annotations

import html
import posixpath
from datetime import datetime, timezone
from typing import Iterable, List
from urllib.parse import quote

from loguru import logger

from ..core.config import get_settings
from ..core.errors import InvalidPathError
from ..core.importpath import STDLIB_MODULE_PATH
from ..core.versioning import LATEST_VERSION, split_path_version, tag_for_version
from .licenses import ROOT_DIR, LicenseRecord, are_redistributable
from .models import Package, VersionInfo
from .schemas import LicenseMetadata, ModuleHeader, PackageHeader


def construct_module_url(module_path: str, version: str) -> str:
    url = "/"
    if module_path != STDLIB_MODULE_PATH:
        url += "mod/"
    url += module_path
    if version != LATEST_VERSION:
        url += "@" + version
    return url


def construct_package_url(pkg_path: str, module_path: str, version: str) -> str:
    if version == LATEST_VERSION:
        return "/" + pkg_path
    if pkg_path == module_path or module_path == STDLIB_MODULE_PATH:
        return f"/{pkg_path}@{version}"
    suffix = pkg_path.removeprefix(module_path + "/")
    return f"/{module_path}@{version}/{suffix}"


def effective_name(pkg: Package) -> str:
    """The package name, or for commands the last element of the path."""
    if pkg.name != "main":
        return pkg.name
    if pkg.path.endswith("/v1"):
        prefix = pkg.path[:-3]
    else:
        prefix, _ = split_path_version(pkg.path)
    return posixpath.basename(prefix)


def package_title(pkg: Package) -> str:
    if pkg.name != "main":
        return "Package " + pkg.name
    return "Command " + effective_name(pkg)


def module_title(module_path: str) -> str:
    if module_path == STDLIB_MODULE_PATH:
        return "Standard library"
    return "Module " + module_path


def _dir(p: str) -> str:
    return posixpath.dirname(p) or "."


def breadcrumb_path(pkg_path: str, mod_path: str, version: str) -> str:
    """
    Build HTML that displays pkg_path as a sequence of links to its parents.

    pkg_path may be a package import path or a directory. mod_path is the
    module path, a prefix of pkg_path except within the standard library.
    version is the module version, or LATEST_VERSION.
    """
    # Successive prefixes of pkg_path, stopping at mod_path, or for the
    # standard library at the first element.
    min_len = len(mod_path) - 1
    if mod_path == STDLIB_MODULE_PATH:
        min_len = 1
    dirs: List[str] = []
    d = pkg_path
    while len(d) > min_len and len(_dir(d)) < len(d):
        dirs.append(d)
        d = _dir(d)
    if not dirs:
        dirs = [pkg_path]

    elems = [""] * len(dirs)
    # The current page is not a link and only shows its base name when it
    # has parents.
    current = dirs[0]
    if len(dirs) > 1:
        current = posixpath.basename(current)
    elems[-1] = f'<span class="DetailsHeader-breadcrumbCurrent">{html.escape(current)}</span>'
    for i in range(1, len(dirs)):
        href = "/" + dirs[i]
        if version != LATEST_VERSION:
            href += "@" + version
        el = dirs[i]
        if i != len(dirs) - 1:
            el = posixpath.basename(el)
        elems[len(elems) - i - 1] = f'<a href="{html.escape(href)}">{html.escape(el)}</a>'
    return (
        '<div class="DetailsHeader-breadcrumb">'
        + '<span class="DetailsHeader-breadcrumbDivider">/</span>'.join(elems)
        + "</div>"
    )


def elapsed_time(date: datetime, now: datetime | None = None) -> str:
    """
    Human-readable relative timestamp:
      'N hours ago' under 6 hours, 'today' under a day, 'N days ago' under
      6 days, otherwise a date like 'Jan  2, 2006'.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    # Naive timestamps are taken to be UTC.
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    # Truncate toward zero so a commit slightly in the future reads "0 hours ago".
    elapsed_hours = int((now - date).total_seconds() / 3600)
    if elapsed_hours == 1:
        return "1 hour ago"
    elif elapsed_hours < 6:
        return f"{elapsed_hours} hours ago"

    elapsed_days = elapsed_hours // 24
    if elapsed_days < 1:
        return "today"
    elif elapsed_days == 1:
        return "1 day ago"
    elif elapsed_days < 6:
        return f"{elapsed_days} days ago"

    return f"{date:%b} {date.day:2d}, {date.year}"


def file_source(module_path: str, version: str, file_path: str) -> str:
    """
    Location of file_path in the module zip. For the standard library the
    file's URL in the Go source repository is returned instead.
    """
    if module_path != STDLIB_MODULE_PATH:
        return f"{module_path}@{version}/{file_path}"

    root = get_settings().STDLIB_REPO_URL.removeprefix("https://")
    try:
        tag = tag_for_version(version)
    except InvalidPathError as e:
        logger.error("file_source: {}", e)
        return f"{root}/+/refs/heads/master/{file_path}"
    return f"{root}/+/refs/tags/{tag}/{file_path}"


def suggested_search(path: str) -> str:
    return (
        f"To search for packages like {html.escape(path)}, "
        f'<a href="/search?q={quote(path)}">click here</a>.'
    )


def license_metadata(records: Iterable[LicenseRecord]) -> List[LicenseMetadata]:
    return [LicenseMetadata(type=r.type, file_path=r.file_path) for r in records]


def create_module(vi: VersionInfo, records: Iterable[LicenseRecord], allowed: frozenset) -> ModuleHeader:
    records = list(records)
    return ModuleHeader(
        version=vi.version,
        path=vi.module_path,
        commit_time=elapsed_time(vi.commit_time),
        repository_url=vi.repository_url,
        is_redistributable=are_redistributable(records, allowed),
        url=construct_module_url(vi.module_path, vi.version),
        licenses=license_metadata(records),
    )


def package_suffix(pkg: Package, vi: VersionInfo) -> str:
    suffix = pkg.path.removeprefix(vi.module_path).removeprefix("/")
    if suffix == "":
        suffix = effective_name(pkg) + " (root)"
    return suffix


def create_package(pkg: Package, vi: VersionInfo, allowed: frozenset) -> PackageHeader:
    if pkg is None or vi is None:
        raise ValueError("package and version info are required")

    # The module header only reflects the licenses at the module root.
    mod_licenses = [r for r in pkg.licenses if r.directory == ROOT_DIR]
    return PackageHeader(
        module=create_module(vi, mod_licenses, allowed),
        path=pkg.path,
        suffix=package_suffix(pkg, vi),
        synopsis=pkg.synopsis,
        is_redistributable=are_redistributable(pkg.licenses, allowed),
        url=construct_package_url(pkg.path, vi.module_path, vi.version),
        licenses=license_metadata(pkg.licenses),
    )
