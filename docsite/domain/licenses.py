# docsite/domain/licenses.py
"""
License records and the redistributability policy.

Content derived from a module or package may only be shown when the
module root and every other directory holding a license file each have at
least one license of an allowed type. Having no license files at all is
never enough: missing license information does not default to "open".
"""
from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

ROOT_DIR = "."


@dataclass(frozen=True)
class LicenseRecord:
    type: str
    file_path: str  # relative to the module root

    @property
    def directory(self) -> str:
        return directory_of(self.file_path)


@dataclass(frozen=True)
class License(LicenseRecord):
    contents: str = ""

    @property
    def record(self) -> LicenseRecord:
        return LicenseRecord(self.type, self.file_path)


@dataclass
class RedistributabilityReport:
    redistributable: bool
    directories: Dict[str, bool] = field(default_factory=dict)


def directory_of(file_path: str) -> str:
    return posixpath.dirname(file_path) or ROOT_DIR


def _is_at_or_above(directory: str, target: str) -> bool:
    if directory == ROOT_DIR or directory == target:
        return True
    return target.startswith(directory + "/")


def licenses_for_directory(records: Iterable[LicenseRecord], directory: str) -> List[LicenseRecord]:
    """Records whose file lives in directory or one of its parents."""
    directory = directory.strip("/") or ROOT_DIR
    return [r for r in records if _is_at_or_above(r.directory, directory)]


def directory_verdicts(records: Iterable[LicenseRecord], allowed: Sequence[str] | frozenset) -> Dict[str, bool]:
    """Map each directory holding a license file to whether it is compliant."""
    verdicts: Dict[str, bool] = {}
    for r in records:
        d = r.directory
        verdicts[d] = verdicts.get(d, False) or r.type in allowed
    return verdicts


def evaluate(records: Iterable[LicenseRecord], allowed: Sequence[str] | frozenset) -> RedistributabilityReport:
    verdicts = directory_verdicts(records, allowed)
    if not verdicts.get(ROOT_DIR):
        return RedistributabilityReport(False, verdicts)
    return RedistributabilityReport(all(verdicts.values()), verdicts)


def are_redistributable(
    records: Iterable[LicenseRecord],
    allowed: Sequence[str] | frozenset,
    directory: str | None = None,
) -> bool:
    """
    Report whether content covered by records may be redistributed.

    With directory set, only license files at or above that directory are
    considered, so a package is judged independently of its siblings.
    """
    records = list(records)
    if directory is not None:
        records = licenses_for_directory(records, directory)
    if not records:
        return False
    return evaluate(records, allowed).redistributable
