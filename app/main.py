import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.routers import blog, portfolio, posts
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Asset directories under STATIC_ROOT, each served at /<name>
ASSET_DIRS = ("css", "js", "images", "videos", "files")


def mount_assets(target: FastAPI, static_root: str) -> None:
    root = Path(static_root)
    for name in ASSET_DIRS:
        directory = root / name
        if not directory.is_dir():
            logger.warning(f"Static directory {directory} not found; /{name} is not served")
            continue
        target.mount(f"/{name}", StaticFiles(directory=str(directory)), name=name)


app = FastAPI(
    title="Portfolio Blog",
    description="Portfolio and blog pages rendered from a JSON feed",
)

app.include_router(portfolio.router)
app.include_router(blog.router)
app.include_router(posts.router)
mount_assets(app, settings.STATIC_ROOT)


@app.get("/health")
async def health():
    return {"message": "Blog API is running"}
