# docsite/domain/tabs.py
from types import MappingProxyType
from typing import Mapping, Tuple

from .schemas import TabSettings

PACKAGE_TAB_SETTINGS: Tuple[TabSettings, ...] = (
    TabSettings(name="doc", display_name="Doc", template_name="pkg_doc.tmpl"),
    TabSettings(name="readme", display_name="README", template_name="readme.tmpl"),
    TabSettings(
        name="subdirectories", display_name="Subdirectories",
        always_show_details=True, template_name="subdirectories.tmpl",
    ),
    TabSettings(
        name="versions", display_name="Versions",
        always_show_details=True, template_name="versions.tmpl",
    ),
    TabSettings(
        name="imports", display_name="Imports",
        always_show_details=True, template_name="pkg_imports.tmpl",
    ),
    TabSettings(
        name="importedby", display_name="Imported By",
        always_show_details=True, template_name="pkg_importedby.tmpl",
    ),
    TabSettings(name="licenses", display_name="Licenses", template_name="licenses.tmpl"),
)

MODULE_TAB_SETTINGS: Tuple[TabSettings, ...] = (
    TabSettings(name="readme", display_name="README", template_name="readme.tmpl"),
    TabSettings(
        name="packages", display_name="Packages",
        always_show_details=True, template_name="subdirectories.tmpl",
    ),
    TabSettings(
        name="versions", display_name="Versions",
        always_show_details=True, template_name="versions.tmpl",
    ),
    TabSettings(name="licenses", display_name="Licenses", template_name="licenses.tmpl"),
)

DIRECTORY_TAB_SETTINGS: Tuple[TabSettings, ...] = (
    TabSettings(
        name="subdirectories", display_name="Subdirectories",
        always_show_details=True, template_name="directory.tmpl",
    ),
)

PACKAGE_TAB_LOOKUP: Mapping[str, TabSettings] = MappingProxyType({t.name: t for t in PACKAGE_TAB_SETTINGS})
MODULE_TAB_LOOKUP: Mapping[str, TabSettings] = MappingProxyType({t.name: t for t in MODULE_TAB_SETTINGS})


def package_tab(tab: str | None, is_redistributable: bool) -> TabSettings:
    """Settings for the requested package tab, falling back to a default."""
    settings = PACKAGE_TAB_LOOKUP.get(tab or "")
    if settings is None:
        settings = PACKAGE_TAB_LOOKUP["doc" if is_redistributable else "subdirectories"]
    return settings


def module_tab(tab: str | None) -> TabSettings:
    return MODULE_TAB_LOOKUP.get(tab or "") or MODULE_TAB_LOOKUP["readme"]
