# docsite/domain/models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from .licenses import License, LicenseRecord


@dataclass
class VersionInfo:
    module_path: str
    version: str
    commit_time: datetime
    repository_url: str | None = None
    readme_file_path: str | None = None
    readme_contents: str | None = None


@dataclass
class Package:
    path: str
    name: str
    synopsis: str = ""
    documentation_html: str = ""
    imports: List[str] = field(default_factory=list)
    # License files at or above the package directory.
    licenses: List[LicenseRecord] = field(default_factory=list)


@dataclass
class VersionedPackage:
    package: Package
    version_info: VersionInfo

    @property
    def path(self) -> str:
        return self.package.path

    @property
    def module_path(self) -> str:
        return self.version_info.module_path

    @property
    def version(self) -> str:
        return self.version_info.version


@dataclass
class ModuleVersion:
    version_info: VersionInfo
    packages: List[Package] = field(default_factory=list)
    licenses: List[License] = field(default_factory=list)


@dataclass
class Directory:
    path: str
    version_info: VersionInfo
    packages: List[Package] = field(default_factory=list)
