# docsite/core/versioning.py
"""
Semantic version helpers.

Versions follow the module-system flavour of semver: a leading ``v`` is
required and the ``vMAJOR`` and ``vMAJOR.MINOR`` shorthands are accepted
(they mean ``.0`` for the missing parts and cannot carry a prerelease or
build suffix).
"""
import re
from typing import Tuple

from .errors import InvalidPathError

# Sentinel used in URLs and lookups to request the newest version.
LATEST_VERSION = "latest"

_NUM = r"(?:0|[1-9][0-9]*)"
_PRE_IDENT = r"(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)"
_BUILD_IDENT = r"[0-9A-Za-z-]+"

_SEMVER_RE = re.compile(
    rf"^v(?P<major>{_NUM})"
    rf"(?:\.(?P<minor>{_NUM})"
    rf"(?:\.(?P<patch>{_NUM})"
    rf"(?P<prerelease>-{_PRE_IDENT}(?:\.{_PRE_IDENT})*)?"
    rf"(?P<build>\+{_BUILD_IDENT}(?:\.{_BUILD_IDENT})*)?"
    r")?)?$"
)

# Major version suffixes: example.com/m/v2, gopkg.in/yaml.v2
_PATH_MAJOR_RE = re.compile(r"^(?P<prefix>.+?)/(?P<major>v(?:[2-9]|[1-9][0-9]+))$")
_GOPKG_MAJOR_RE = re.compile(r"^(?P<prefix>gopkg\.in/.+?)\.(?P<major>v[0-9]+(?:-unstable)?)$")


def is_valid_semver(version: str) -> bool:
    return _SEMVER_RE.fullmatch(version) is not None


def _parts(version: str) -> Tuple[int, int, int, str]:
    m = _SEMVER_RE.fullmatch(version)
    if m is None:
        raise ValueError(f"{version!r} is not a valid semantic version")
    return (
        int(m.group("major")),
        int(m.group("minor") or 0),
        int(m.group("patch") or 0),
        m.group("prerelease") or "",
    )


def semver_key(version: str):
    """Sort key implementing semver precedence (release after prerelease)."""
    major, minor, patch, pre = _parts(version)
    if not pre:
        return (major, minor, patch, 1, ())
    idents = []
    for ident in pre[1:].split("."):
        if ident.isdigit():
            idents.append((0, int(ident), ""))
        else:
            idents.append((1, 0, ident))
    return (major, minor, patch, 0, tuple(idents))


def tag_for_version(version: str) -> str:
    """
    Return the Go repository tag for a standard library version.

    v1.13.0 -> go1.13, v1.13.2 -> go1.13.2, v1.14.0-beta.1 -> go1.14beta1
    """
    try:
        major, minor, patch, pre = _parts(version)
    except ValueError:
        raise InvalidPathError(f"requested version is not valid semver: {version!r}")
    if patch != 0:
        tag = f"go{major}.{minor}.{patch}"
    elif minor != 0:
        tag = f"go{major}.{minor}"
    else:
        tag = f"go{major}"
    if pre:
        tag += pre[1:].replace(".", "")
    return tag


def split_path_version(path: str) -> Tuple[str, str]:
    """Split a module path into (prefix, major version suffix)."""
    m = _GOPKG_MAJOR_RE.match(path)
    if m:
        return m.group("prefix"), "." + m.group("major")
    m = _PATH_MAJOR_RE.match(path)
    if m:
        return m.group("prefix"), "/" + m.group("major")
    return path, ""
