# docsite/core/urlpath.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from .errors import InvalidPathError
from .importpath import STDLIB_MODULE_PATH, check_import_path, in_stdlib
from .versioning import LATEST_VERSION


class ModulePathKind(str, Enum):
    known = "known"
    unknown = "unknown"
    stdlib = "stdlib"


@dataclass(frozen=True)
class ModulePath:
    """
    Module path as far as it can be told from a URL.

    A URL like <path>@<version> or <path> does not say which part of <path>
    is the module and which is the package suffix, so the module is
    ``unknown`` until the package is looked up.
    """

    kind: ModulePathKind
    path: str | None = None

    @classmethod
    def known(cls, path: str) -> "ModulePath":
        return cls(ModulePathKind.known, path)

    @property
    def is_known(self) -> bool:
        return self.kind is ModulePathKind.known

    @property
    def is_unknown(self) -> bool:
        return self.kind is ModulePathKind.unknown

    @property
    def is_stdlib(self) -> bool:
        return self.kind is ModulePathKind.stdlib

    def __str__(self) -> str:
        if self.is_stdlib:
            return STDLIB_MODULE_PATH
        if self.is_unknown:
            return "<unknown>"
        return self.path


UNKNOWN_MODULE = ModulePath(ModulePathKind.unknown)
STDLIB_MODULE = ModulePath(ModulePathKind.stdlib, STDLIB_MODULE_PATH)


@dataclass(frozen=True)
class ResolvedPath:
    package_path: str
    module_path: ModulePath
    version: str


def parse_details_url_path(url_path: str) -> ResolvedPath:
    """
    Split a details URL into package path, module path and version.

    The URL is expected to look like /<module-path>[@<version>/<suffix>].
    Without a version, LATEST_VERSION is used and the module path is
    unknown; the module path can only be told apart from the package
    path when both a version and a suffix are present.
    """
    base, sep, rest = url_path.partition("@")
    base = base.removeprefix("/").removesuffix("/")
    if not sep:
        module_path = UNKNOWN_MODULE
        version = LATEST_VERSION
        package_path = base
    else:
        version, _, suffix = rest.partition("/")
        if suffix == "" or version == LATEST_VERSION:
            module_path = UNKNOWN_MODULE
            package_path = base
        else:
            module_path = ModulePath.known(base)
            package_path = f"{base}/{suffix}"

    try:
        check_import_path(package_path)
    except InvalidPathError as e:
        logger.debug("parse_details_url_path({!r}): {}", url_path, e)
        raise InvalidPathError(f"malformed path {package_path!r}: {e}") from e

    if in_stdlib(package_path):
        module_path = STDLIB_MODULE
    return ResolvedPath(package_path, module_path, version)
