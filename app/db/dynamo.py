import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)

# Initialize DynamoDB resource
dynamodb = boto3.resource("dynamodb", region_name=settings.DYNAMO_REGION)

# Get table references
budgets_table = dynamodb.Table(settings.DYNAMO_BUDGETS_TABLE)


def put_budget(budget_item: dict):
    """Insert a new budget snapshot. Snapshots are never updated afterwards."""
    try:
        budgets_table.put_item(Item=_convert_for_dynamo(budget_item))
        return True
    except (ClientError, BotoCoreError) as e:
        logger.error(f"put_budget failed: {_error_message(e)}")
        raise PersistenceFailure("Failed to save budget") from e


def get_budget(budget_id: str) -> Optional[Dict[str, Any]]:
    """Fetch a single budget snapshot by its id."""
    try:
        response = budgets_table.get_item(Key={"budget_id": budget_id})
        item = response.get("Item")
        return _from_dynamo(item) if item else None
    except (ClientError, BotoCoreError) as e:
        logger.error(f"get_budget failed: {_error_message(e)}")
        raise PersistenceFailure("Failed to load budget") from e


def list_budgets() -> List[Dict[str, Any]]:
    """
    Return every stored budget snapshot, most recent first.
    Follows scan pagination until the table is exhausted.
    """
    items: List[Dict[str, Any]] = []
    scan_kwargs: Dict[str, Any] = {}
    try:
        while True:
            response = budgets_table.scan(**scan_kwargs)
            items.extend(_from_dynamo(item) for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key
    except (ClientError, BotoCoreError) as e:
        logger.error(f"list_budgets failed: {_error_message(e)}")
        raise PersistenceFailure("Failed to list budgets") from e

    # ISO-8601 timestamps sort lexicographically
    return sorted(items, key=lambda item: item.get("created_at", ""), reverse=True)


def _error_message(error: Exception) -> str:
    # BotoCoreError (no credentials, endpoint unreachable) carries no response
    response = getattr(error, "response", None) or {}
    return response.get("Error", {}).get("Message", str(error))


def _walk(obj: Any, convert):
    """Apply convert to every scalar inside nested dicts and lists."""
    if isinstance(obj, dict):
        return {key: _walk(value, convert) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_walk(value, convert) for value in obj]
    return convert(obj)


def _float_to_decimal(value: Any):
    # boto3 refuses floats; str() keeps the shortest repr (0.1 -> "0.1")
    return Decimal(str(value)) if isinstance(value, float) else value


def _decimal_to_number(value: Any):
    if not isinstance(value, Decimal):
        return value
    return int(value) if value == value.to_integral_value() else float(value)


def _convert_for_dynamo(obj: Any):
    return _walk(obj, _float_to_decimal)


def _from_dynamo(obj: Any):
    return _walk(obj, _decimal_to_number)
