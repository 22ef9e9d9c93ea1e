import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.exceptions import LoadError
from app.schemas.portfolio import Portfolio
from app.services import navigation
from app.services.renderer import BlogRenderer
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

CONTACT_THANKS = "Thank you for your message! I will get back to you soon."


def _render_landing(repo, portfolio_repo, renderer, current_settings, notice=""):
    try:
        posts = repo.load().posts
    except LoadError as e:
        logger.warning(f"Portfolio rendered without latest posts: {e}")
        posts = []
    try:
        portfolio = portfolio_repo.load()
    except LoadError as e:
        logger.warning(f"Portfolio rendered without profile content: {e}")
        portfolio = Portfolio()
    recent = navigation.recent_posts(posts, current_settings.RECENT_POSTS_COUNT)
    return HTMLResponse(renderer.render_portfolio(recent, portfolio, notice=notice))


@router.get("/", response_class=HTMLResponse)
def portfolio(
    repo=Depends(deps.get_blog_repo),
    portfolio_repo=Depends(deps.get_portfolio_repo),
    renderer: BlogRenderer = Depends(deps.get_renderer),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Portfolio landing page with the latest posts when the blog data loads."""
    return _render_landing(repo, portfolio_repo, renderer, current_settings)


@router.get("/contact", response_class=HTMLResponse)
def contact(
    name: str = "",
    message: str = "",
    repo=Depends(deps.get_blog_repo),
    portfolio_repo=Depends(deps.get_portfolio_repo),
    renderer: BlogRenderer = Depends(deps.get_renderer),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Contact form target: acknowledge the message on the landing page."""
    # Messages are not stored or forwarded anywhere
    logger.info(f"Contact form submitted by {name or 'anonymous'} ({len(message)} chars)")
    return _render_landing(
        repo, portfolio_repo, renderer, current_settings, notice=CONTACT_THANKS
    )
