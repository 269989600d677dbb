import logging
from contextlib import asynccontextmanager
from typing import Callable

from dotenv import load_dotenv
from fastapi import FastAPI

from catalog_admin.api.routes_api import router as api_router
from catalog_admin.core.config import get_settings
from catalog_admin.gateways import Gateways
from catalog_admin.services.admin import AdminWorkflow

load_dotenv()

settings = get_settings()
logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(gateways_factory: Callable[[], Gateways] = Gateways) -> FastAPI:
    """Build the admin console around one workflow."""

    @asynccontextmanager
    async def app_lifespan(app: FastAPI):
        """Application lifespan context manager."""
        workflow = AdminWorkflow(gateways_factory())
        app.state.workflow = workflow
        try:
            await workflow.start()
            yield
        finally:
            try:
                await workflow.aclose()
            except Exception as e:
                logger.error(f"Error closing admin workflow: {e}")

    app = FastAPI(
        title="Catalog Admin",
        description="Operator console for series, seasons and episodes",
        version="0.1.0",
        lifespan=app_lifespan,
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
