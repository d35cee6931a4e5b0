# docsite/domain/datasource.py
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import yaml
from loguru import logger

from ..core.config import get_settings
from ..core.errors import NotFoundError
from ..core.importpath import STDLIB_MODULE_PATH, in_stdlib
from ..core.versioning import LATEST_VERSION, semver_key
from .licenses import License, licenses_for_directory
from .models import Directory, ModuleVersion, Package, VersionedPackage, VersionInfo


# ---------------------------------------------------------
# Base class
# ---------------------------------------------------------
class DataSource:
    """
    Read access to package and module metadata.

    Every getter raises NotFoundError when the requested entity does not
    exist; any other exception is treated as an internal failure.
    """

    def get_package(self, pkg_path: str, version: str) -> VersionedPackage:
        raise NotImplementedError

    def get_package_in_module_version(self, pkg_path: str, module_path: str, version: str) -> VersionedPackage:
        raise NotImplementedError

    def get_version_info(self, module_path: str, version: str) -> VersionInfo:
        raise NotImplementedError

    def get_module_licenses(self, module_path: str, version: str) -> List[License]:
        raise NotImplementedError

    def get_package_licenses(self, pkg_path: str, module_path: str, version: str) -> List[License]:
        raise NotImplementedError

    def get_packages_in_version(self, module_path: str, version: str) -> List[Package]:
        raise NotImplementedError

    def get_directory(self, dir_path: str, version: str) -> Directory:
        raise NotImplementedError

    def get_package_versions(self, pkg_path: str) -> List[VersionInfo]:
        raise NotImplementedError

    def get_module_versions(self, module_path: str) -> List[VersionInfo]:
        raise NotImplementedError

    def get_imported_by(self, pkg_path: str, module_path: str, limit: int) -> List[str]:
        raise NotImplementedError

    def get_imported_by_count(self, pkg_path: str, module_path: str) -> int:
        raise NotImplementedError

    def is_excluded(self, path: str) -> bool:
        raise NotImplementedError


def package_dir(module_path: str, pkg_path: str) -> str:
    """Directory of pkg_path relative to the root of its module."""
    if module_path == STDLIB_MODULE_PATH:
        return pkg_path
    if pkg_path == module_path:
        return "."
    return pkg_path[len(module_path) + 1:]


def _newest_first(mvs: Iterable[ModuleVersion]) -> List[ModuleVersion]:
    return sorted(
        mvs,
        key=lambda mv: (semver_key(mv.version_info.version), len(mv.version_info.module_path)),
        reverse=True,
    )


# ---------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------
class InMemoryDataSource(DataSource):
    def __init__(self, modules: Iterable[ModuleVersion] = (), excluded: Iterable[str] = ()):
        self._modules: Dict[Tuple[str, str], ModuleVersion] = {}
        self._excluded = [e.strip("/") for e in excluded]
        for mv in modules:
            self.add(mv)

    def add(self, mv: ModuleVersion) -> None:
        vi = mv.version_info
        self._modules[(vi.module_path, vi.version)] = mv

    def exclude(self, path: str) -> None:
        self._excluded.append(path.strip("/"))

    # -- helpers --------------------------------------------------------
    def _versions_of(self, module_path: str) -> List[ModuleVersion]:
        return _newest_first(mv for (m, _), mv in self._modules.items() if m == module_path)

    def _module_version(self, module_path: str, version: str) -> ModuleVersion:
        if version == LATEST_VERSION:
            versions = self._versions_of(module_path)
            if versions:
                return versions[0]
        elif (module_path, version) in self._modules:
            return self._modules[(module_path, version)]
        raise NotFoundError(f"module {module_path}@{version} not found")

    @staticmethod
    def _scoped(mv: ModuleVersion, pkg: Package) -> Package:
        d = package_dir(mv.version_info.module_path, pkg.path)
        records = [lic.record for lic in licenses_for_directory(mv.licenses, d)]
        return replace(pkg, licenses=records)

    @staticmethod
    def _find(mv: ModuleVersion, pkg_path: str) -> Package | None:
        for p in mv.packages:
            if p.path == pkg_path:
                return p
        return None

    # -- DataSource -----------------------------------------------------
    def get_package(self, pkg_path: str, version: str) -> VersionedPackage:
        candidates = [
            mv for mv in self._modules.values()
            if self._find(mv, pkg_path) is not None
            and (version == LATEST_VERSION or mv.version_info.version == version)
        ]
        if not candidates:
            raise NotFoundError(f"package {pkg_path}@{version} not found")
        mv = _newest_first(candidates)[0]
        return VersionedPackage(self._scoped(mv, self._find(mv, pkg_path)), mv.version_info)

    def get_package_in_module_version(self, pkg_path: str, module_path: str, version: str) -> VersionedPackage:
        mv = self._module_version(module_path, version)
        pkg = self._find(mv, pkg_path)
        if pkg is None:
            raise NotFoundError(f"package {pkg_path} not found in {module_path}@{version}")
        return VersionedPackage(self._scoped(mv, pkg), mv.version_info)

    def get_version_info(self, module_path: str, version: str) -> VersionInfo:
        return self._module_version(module_path, version).version_info

    def get_module_licenses(self, module_path: str, version: str) -> List[License]:
        return list(self._module_version(module_path, version).licenses)

    def get_package_licenses(self, pkg_path: str, module_path: str, version: str) -> List[License]:
        mv = self._module_version(module_path, version)
        if self._find(mv, pkg_path) is None:
            raise NotFoundError(f"package {pkg_path} not found in {module_path}@{version}")
        return licenses_for_directory(mv.licenses, package_dir(module_path, pkg_path))

    def get_packages_in_version(self, module_path: str, version: str) -> List[Package]:
        mv = self._module_version(module_path, version)
        return sorted((self._scoped(mv, p) for p in mv.packages), key=lambda p: p.path)

    def get_directory(self, dir_path: str, version: str) -> Directory:
        candidates = []
        for mv in self._modules.values():
            m = mv.version_info.module_path
            if version != LATEST_VERSION and mv.version_info.version != version:
                continue
            if m == STDLIB_MODULE_PATH:
                if not in_stdlib(dir_path):
                    continue
            elif dir_path != m and not dir_path.startswith(m + "/"):
                continue
            if any(p.path.startswith(dir_path + "/") for p in mv.packages):
                candidates.append(mv)
        if not candidates:
            raise NotFoundError(f"directory {dir_path}@{version} not found")
        mv = _newest_first(candidates)[0]
        packages = sorted(
            (self._scoped(mv, p) for p in mv.packages if p.path.startswith(dir_path + "/")),
            key=lambda p: p.path,
        )
        return Directory(dir_path, mv.version_info, packages)

    def get_package_versions(self, pkg_path: str) -> List[VersionInfo]:
        mvs = [mv for mv in self._modules.values() if self._find(mv, pkg_path) is not None]
        if not mvs:
            raise NotFoundError(f"package {pkg_path} not found")
        return [mv.version_info for mv in _newest_first(mvs)]

    def get_module_versions(self, module_path: str) -> List[VersionInfo]:
        mvs = self._versions_of(module_path)
        if not mvs:
            raise NotFoundError(f"module {module_path} not found")
        return [mv.version_info for mv in mvs]

    def _importers(self, pkg_path: str, module_path: str) -> List[str]:
        latest: Dict[str, ModuleVersion] = {}
        for mv in _newest_first(self._modules.values()):
            latest.setdefault(mv.version_info.module_path, mv)
        importers = set()
        for m, mv in latest.items():
            if m == module_path:
                continue
            for p in mv.packages:
                if pkg_path in p.imports:
                    importers.add(p.path)
        return sorted(importers)

    def get_imported_by(self, pkg_path: str, module_path: str, limit: int) -> List[str]:
        return self._importers(pkg_path, module_path)[:limit]

    def get_imported_by_count(self, pkg_path: str, module_path: str) -> int:
        return len(self._importers(pkg_path, module_path))

    def is_excluded(self, path: str) -> bool:
        path = path.strip("/")
        return any(path == e or path.startswith(e + "/") for e in self._excluded)

    # -- loading --------------------------------------------------------
    @classmethod
    def from_dict(cls, data: dict) -> "InMemoryDataSource":
        modules = []
        for m in data.get("modules") or []:
            vi = VersionInfo(
                module_path=m["module_path"],
                version=m["version"],
                commit_time=_parse_time(m.get("commit_time")),
                repository_url=m.get("repository_url"),
                readme_file_path=m.get("readme_file_path"),
                readme_contents=m.get("readme_contents"),
            )
            licenses = [
                License(type=lic["type"], file_path=lic["file_path"], contents=lic.get("contents", ""))
                for lic in m.get("licenses") or []
            ]
            packages = [
                Package(
                    path=p["path"],
                    name=p["name"],
                    synopsis=p.get("synopsis", ""),
                    documentation_html=p.get("documentation_html", ""),
                    imports=list(p.get("imports") or []),
                )
                for p in m.get("packages") or []
            ]
            modules.append(ModuleVersion(vi, packages, licenses))
        return cls(modules, data.get("excluded") or [])

    @classmethod
    def from_file(cls, path: str | Path) -> "InMemoryDataSource":
        with Path(path).open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        ds = cls.from_dict(data)
        logger.info("Loaded {} module versions from {}", len(ds._modules), path)
        return ds


def _parse_time(value) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    elif not isinstance(value, datetime) and isinstance(value, date):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------
# Factory / global getter
# ---------------------------------------------------------
_datasource: DataSource | None = None

def get_datasource() -> DataSource:
    """Return the active data source, loading the seed file on first use."""
    global _datasource
    if _datasource:
        return _datasource

    s = get_settings()
    if s.DATA_FILE:
        ds = InMemoryDataSource.from_file(s.DATA_FILE)
    else:
        logger.warning("DATA_FILE is not set; serving from an empty data source")
        ds = InMemoryDataSource()
    for path in s.EXCLUDED_PATHS:
        ds.exclude(path)
    _datasource = ds
    return _datasource
