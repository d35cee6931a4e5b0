# docsite/api/rendering.py
"""
Hand page models to the renderer.

Pages are serialized as ``{"template": <name>, "page": <model>}`` so that
any template engine can consume them.
"""
from http import HTTPStatus

from fastapi.responses import JSONResponse

from ..domain.schemas import BasePage, DetailsPage, ErrorPage

ERROR_TEMPLATE = "error.tmpl"


def render_page(template_name: str, page: BasePage, status_code: int = HTTPStatus.OK) -> JSONResponse:
    if isinstance(page, DetailsPage):
        data = page.to_template_data()
    else:
        data = page.model_dump()
    return JSONResponse({"template": template_name, "page": data}, status_code=int(status_code))


def render_error(status_code: int, epage: ErrorPage | None = None) -> JSONResponse:
    """Error page for status_code; the reason phrase is used when epage is None."""
    status = HTTPStatus(status_code)
    if epage is None:
        epage = ErrorPage(message=status.phrase)
    data = {"status": status.value, **epage.model_dump()}
    return JSONResponse({"template": ERROR_TEMPLATE, "page": data}, status_code=status.value)
