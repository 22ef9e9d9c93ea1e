import logging

from pydantic import ValidationError

from app.exceptions import ParseError
from app.repos.blog_data_repo import BlogDataRepo
from app.schemas.portfolio import Portfolio

logger = logging.getLogger(__name__)


class PortfolioRepo(BlogDataRepo):
    """Loads the landing page content document from a local path or URL."""

    def load(self) -> Portfolio:
        payload = self._decode(self._read())
        try:
            portfolio = Portfolio.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Portfolio data in {self.source} failed validation: {e}")
            raise ParseError(self.source, str(e)) from e

        logger.info(
            f"Loaded {len(portfolio.skills)} skills and "
            f"{len(portfolio.projects)} projects from {self.source}"
        )
        return portfolio
