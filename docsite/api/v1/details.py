# docsite/api/v1/details.py
from http import HTTPStatus

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from loguru import logger

from ... import deps
from ...core.config import Settings, get_settings
from ...core.errors import InvalidPathError, NotFoundError
from ...core.urlpath import ResolvedPath, parse_details_url_path
from ...domain.datasource import DataSource
from ...domain.details import (
    MODULE_NAMESPACE,
    PACKAGE_NAMESPACE,
    build_directory_page,
    build_module_page,
    build_package_page,
    fetch_package_or_module,
)
from ...domain.schemas import BasePage
from ..rendering import render_error, render_page

router = APIRouter()


@router.get("/")
def index(request: Request, settings: Settings = Depends(get_settings)):
    page = BasePage(title=settings.APP_NAME, query=request.query_params.get("q", ""))
    return render_page("index.tmpl", page)


@router.get("/pkg/{url_path:path}")
def legacy_package_details(url_path: str):
    """Old /pkg/<path> links now live at /<path>."""
    return RedirectResponse("/" + url_path, status_code=HTTPStatus.MOVED_PERMANENTLY)


@router.get("/mod/{url_path:path}")
def module_details(url_path: str, request: Request, tab: str = "",
                   ds: DataSource = Depends(deps.get_ds),
                   allowed: frozenset = Depends(deps.get_allowed_licenses)):
    """Handles /mod/<module-path>[@<version>?tab=<tab>]."""
    return serve_module_page(url_path, request, tab, ds, allowed)


@router.get("/{url_path:path}")
def package_details(url_path: str, request: Request, tab: str = "",
                    ds: DataSource = Depends(deps.get_ds),
                    allowed: frozenset = Depends(deps.get_allowed_licenses),
                    settings: Settings = Depends(get_settings)):
    """Handles /<import-path>[@<version>?tab=<tab>]."""
    if url_path == "std" or url_path.startswith("std@v"):
        return serve_module_page(url_path, request, tab, ds, allowed)

    try:
        resolved = parse_details_url_path(url_path)
    except InvalidPathError as e:
        logger.error("package_details: {}", e)
        return render_error(HTTPStatus.BAD_REQUEST)

    # Package "C" is cgo, which has its own article.
    if resolved.package_path == "C":
        return RedirectResponse(settings.CGO_ARTICLE_URL, status_code=HTTPStatus.MOVED_PERMANENTLY)

    def get(version: str):
        if resolved.module_path.is_known:
            return ds.get_package_in_module_version(resolved.package_path, resolved.module_path.path, version)
        return ds.get_package(resolved.package_path, version)

    result = fetch_package_or_module(ds, PACKAGE_NAMESPACE, resolved.package_path, resolved.version, get)
    query = request.query_params.get("q", "")
    if result.ok:
        pkg = result.value
        try:
            page = build_package_page(ds, pkg, tab, allowed, settings.IMPORTED_BY_LIMIT, query)
        except Exception as e:
            logger.error("error building package page for {}@{}: {}", pkg.path, pkg.version, e)
            return render_error(HTTPStatus.INTERNAL_SERVER_ERROR)
        return render_page(page.settings.template_name, page)
    if result.status != HTTPStatus.NOT_FOUND:
        return render_error(result.status, result.error_page)
    return serve_directory_page(resolved, query, ds, allowed)


def serve_module_page(url_path: str, request: Request, tab: str, ds: DataSource, allowed: frozenset):
    try:
        resolved = parse_details_url_path(url_path)
    except InvalidPathError as e:
        logger.info("module_details: {}", e)
        return render_error(HTTPStatus.BAD_REQUEST)

    path = resolved.package_path
    result = fetch_package_or_module(
        ds, MODULE_NAMESPACE, path, resolved.version,
        lambda version: ds.get_version_info(path, version),
    )
    if not result.ok:
        return render_error(result.status, result.error_page)

    vi = result.value
    try:
        page = build_module_page(ds, vi, tab, allowed, request.query_params.get("q", ""))
    except Exception as e:
        logger.error("error building module page for {}@{}: {}", vi.module_path, vi.version, e)
        return render_error(HTTPStatus.INTERNAL_SERVER_ERROR)
    return render_page(page.settings.template_name, page)


def serve_directory_page(resolved: ResolvedPath, query: str, ds: DataSource, allowed: frozenset):
    """Fallback for paths that are not packages but contain packages."""
    try:
        if ds.is_excluded(resolved.package_path):
            return render_error(HTTPStatus.NOT_FOUND)
        directory = ds.get_directory(resolved.package_path, resolved.version)
    except NotFoundError:
        return render_error(HTTPStatus.NOT_FOUND)
    except Exception as e:
        logger.error("error fetching directory {}@{}: {}", resolved.package_path, resolved.version, e)
        return render_error(HTTPStatus.INTERNAL_SERVER_ERROR)
    page = build_directory_page(directory, allowed, query)
    return render_page(page.settings.template_name, page)
