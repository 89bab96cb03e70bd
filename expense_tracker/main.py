import logging

from fastapi import FastAPI

from expense_tracker.core.config import settings
from expense_tracker.routers import analytics, budgets, health

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
)


# Root endpoint
@app.get("/")
def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}


# Register routers
app.include_router(health.router, prefix=f"{settings.API_PREFIX}", tags=["Health"])  # /api/health
app.include_router(analytics.router, prefix=f"{settings.API_PREFIX}/users", tags=["Analytics"])
app.include_router(budgets.router, prefix=f"{settings.API_PREFIX}/users", tags=["Budgets"])

logger.info(f"{settings.PROJECT_NAME} ready, budget storage: {settings.BUDGET_STORAGE_BACKEND}")
