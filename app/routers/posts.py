import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.services.page_controller import PostPageController

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/blogs/{name:path}", response_class=HTMLResponse)
def blog_post(
    name: str,
    request: Request,
    controller: PostPageController = Depends(deps.get_post_controller),
):
    """Single post page; the slug is the last path segment minus its extension."""
    view = controller.open(request.url.path)
    html = controller.renderer.render_page(
        "post.html", view.document, header_image=view.header_image
    )
    return HTMLResponse(html, status_code=view.status_code)
