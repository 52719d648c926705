"""
Health Check Router
Liveness and DynamoDB connectivity endpoints
"""
from fastapi import APIRouter
from datetime import datetime
import logging
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.db import dynamo

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/status")
def aws_services_status():
    """
    Check that the budgets table in DynamoDB is reachable.
    """
    status = {
        "timestamp": datetime.utcnow().isoformat(),
        "services": {}
    }

    dynamodb_status = {
        "connected": False,
        "table": settings.DYNAMO_BUDGETS_TABLE,
        "region": settings.DYNAMO_REGION,
        "error": None
    }
    try:
        dynamo.budgets_table.scan(Limit=1)
        dynamodb_status["connected"] = True
        dynamodb_status["status"] = "accessible"
    except (ClientError, BotoCoreError) as e:
        response = getattr(e, "response", None) or {}
        error_code = response.get("Error", {}).get("Code", type(e).__name__)
        dynamodb_status["error"] = f"{error_code}: {str(e)}"
        dynamodb_status["status"] = "error"
        logger.error(f"DynamoDB check failed: {str(e)}")

    status["services"]["dynamodb"] = dynamodb_status

    all_connected = all(
        service.get("connected", False)
        for service in status["services"].values()
    )
    status["overall_status"] = "healthy" if all_connected else "degraded"

    return status
