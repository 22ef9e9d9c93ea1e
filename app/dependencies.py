from fastapi import Depends

from app.repos.blog_data_repo import BlogDataRepo
from app.repos.portfolio_repo import PortfolioRepo
from app.services.page_controller import ListingController, PostPageController
from app.services.renderer import BlogRenderer
from app.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_blog_repo(current_settings: Settings = Depends(get_settings)):
    return BlogDataRepo(
        current_settings.BLOG_DATA_URL,
        timeout=current_settings.FETCH_TIMEOUT_SECONDS,
    )


def get_portfolio_repo(current_settings: Settings = Depends(get_settings)):
    return PortfolioRepo(
        current_settings.PORTFOLIO_DATA_URL,
        timeout=current_settings.FETCH_TIMEOUT_SECONDS,
    )


def get_renderer(current_settings: Settings = Depends(get_settings)):
    return BlogRenderer(current_settings)


def get_listing_controller(
    repo=Depends(get_blog_repo),
    renderer=Depends(get_renderer),
    current_settings: Settings = Depends(get_settings),
):
    return ListingController(repo=repo, renderer=renderer, settings=current_settings)


def get_post_controller(
    repo=Depends(get_blog_repo),
    renderer=Depends(get_renderer),
    current_settings: Settings = Depends(get_settings),
):
    return PostPageController(repo=repo, renderer=renderer, settings=current_settings)
