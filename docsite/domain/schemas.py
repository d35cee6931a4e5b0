# docsite/domain/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional


class ErrorPage(BaseModel):
    message: str = ""
    secondary_message: str = ""


class TabSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str  # used in the ?tab= query parameter
    display_name: str
    # Whether the tab content may be shown when the package or module is
    # not redistributable.
    always_show_details: bool = False
    template_name: str


class LicenseMetadata(BaseModel):
    type: str
    file_path: str


class ModuleHeader(BaseModel):
    version: str
    path: str
    commit_time: str
    repository_url: str | None = None
    is_redistributable: bool
    url: str
    licenses: List[LicenseMetadata] = []


class PackageHeader(BaseModel):
    module: ModuleHeader
    path: str
    suffix: str
    synopsis: str = ""
    is_redistributable: bool
    url: str
    licenses: List[LicenseMetadata] = []


class DirectoryHeader(BaseModel):
    module: ModuleHeader
    path: str
    url: str


class PackageSummary(BaseModel):
    path: str
    suffix: str
    synopsis: str = ""
    is_redistributable: bool
    url: str


# ---- tab payloads ----
class DocumentationDetails(BaseModel):
    module_path: str
    documentation: str


class ReadMeDetails(BaseModel):
    module_path: str
    readme_file_path: str | None = None
    readme_contents: str | None = None


class DirectoryDetails(BaseModel):
    module_path: str
    version: str
    packages: List[PackageSummary] = []


class VersionSummary(BaseModel):
    version: str
    module_path: str
    commit_time: str
    url: str


class VersionsDetails(BaseModel):
    versions: List[VersionSummary] = []


class ImportsDetails(BaseModel):
    module_path: str
    imports: List[str] = []
    std_lib: List[str] = []


class ImportedByDetails(BaseModel):
    module_path: str
    imported_by: List[str] = []
    total: int = 0  # all importers, not just the listed ones


class LicenseDetail(BaseModel):
    type: str
    file_path: str
    contents: str
    source: str


class LicensesDetails(BaseModel):
    licenses: List[LicenseDetail] = []
    # directory -> whether it holds an allowed license
    directories: Dict[str, bool] = {}


# ---- pages ----
class BasePage(BaseModel):
    title: str
    query: str = ""


class DetailsPage(BasePage):
    can_show_details: bool
    settings: TabSettings
    details: Optional[Any] = None
    header: PackageHeader | ModuleHeader | DirectoryHeader
    breadcrumb_path: str = ""
    tabs: List[TabSettings]
    namespace: str

    def to_template_data(self) -> Dict[str, Any]:
        data = self.model_dump(exclude={"details"})
        details = self.details
        data["details"] = details.model_dump() if isinstance(details, BaseModel) else details
        return data
