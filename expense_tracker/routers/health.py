"""
Health Check Router
Service liveness and storage connectivity
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from expense_tracker.core.config import settings
from expense_tracker.db import dynamo

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "budget_storage": settings.BUDGET_STORAGE_BACKEND,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/status")
def storage_status():
    """
    Check that the DynamoDB users and expenses tables are reachable.
    """
    tables = {
        "users": (dynamo.users_table, settings.DYNAMO_USERS_TABLE),
        "expenses": (dynamo.expenses_table, settings.DYNAMO_EXPENSES_TABLE),
    }
    report = {}
    for name, (table, table_name) in tables.items():
        try:
            table.scan(Limit=1)
            report[name] = {"name": table_name, "status": "accessible", "region": settings.DYNAMO_REGION}
        except Exception as e:
            logger.error(f"DynamoDB check failed for {table_name}: {str(e)}")
            report[name] = {"name": table_name, "status": "error", "error": str(e)}

    connected = all(entry["status"] == "accessible" for entry in report.values())
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "tables": report,
        "overall_status": "healthy" if connected else "degraded",
    }
