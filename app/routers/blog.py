import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse

from app import dependencies as deps
from app.services.page_controller import ListingController

logger = logging.getLogger(__name__)

router = APIRouter()

EVENT_PARAMS = ("event", "value")


@router.get("/blog", response_class=HTMLResponse)
def blog_listing(
    request: Request,
    controller: ListingController = Depends(deps.get_listing_controller),
):
    """Listing page: featured post, paged grid and sidebar."""
    view = controller.open(request.query_params)
    html = controller.renderer.render_page(
        "listing.html",
        view.document,
        search_term=request.query_params.get("q", ""),
    )
    return HTMLResponse(html, status_code=view.status_code)


@router.get("/blog/fragments")
def blog_fragments(
    request: Request,
    event: Optional[str] = None,
    value: str = "",
    controller: ListingController = Depends(deps.get_listing_controller),
):
    """
    Listing mount points as JSON for in-place updates. The remaining query
    parameters are the current address bar; `event`/`value` describe what the
    reader just did (category, tag, search, clear, page or popstate).
    """
    params = {
        key: val
        for key, val in request.query_params.items()
        if key not in EVENT_PARAMS
    }
    view = controller.open(params)
    if event:
        try:
            view = controller.dispatch(event, value, params)
        except ValueError as e:
            logger.warning(str(e))
            raise HTTPException(status_code=400, detail=str(e))
    return JSONResponse(
        {
            "url": view.url,
            "push": bool(controller.history),
            "title": view.title,
            "scroll_target": view.scroll_target,
            "mounts": view.fragments(),
        },
        status_code=view.status_code,
    )
