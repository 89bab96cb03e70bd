import logging
from datetime import datetime, timezone
from decimal import Decimal, DecimalException
from typing import Any, Dict, List, Mapping, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from expense_tracker.core.config import settings
from expense_tracker.core.exceptions import BudgetPersistenceError, ExpenseSourceError

logger = logging.getLogger(__name__)

# Initialize DynamoDB resource
dynamodb = boto3.resource("dynamodb", region_name=settings.DYNAMO_REGION)

# Get table references
users_table = dynamodb.Table(settings.DYNAMO_USERS_TABLE)
expenses_table = dynamodb.Table(settings.DYNAMO_EXPENSES_TABLE)


def get_all_expenses_for_user(user_id: str, table=None) -> List[Dict[str, Any]]:
    """
    Query every expense item of a user, following DynamoDB pagination.
    Amounts come back as Decimal and are kept that way.
    """
    table = table or expenses_table
    items: List[Dict[str, Any]] = []
    query_kwargs: Dict[str, Any] = {"KeyConditionExpression": Key("user_id").eq(user_id)}
    try:
        while True:
            response = table.query(**query_kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            query_kwargs["ExclusiveStartKey"] = last_key
    except ClientError as e:
        logger.error(f"get_all_expenses_for_user failed: {e.response['Error']['Message']}")
        raise ExpenseSourceError(
            "Failed to read expenses", details={"user_id": user_id}, original_error=e
        ) from e
    return items


def get_user_budgets(user_id: str, table=None) -> Optional[Dict[str, Any]]:
    """
    Get the budget mapping stored on the user's record.
    Returns None if the user has no budgets yet or the read fails.
    """
    table = table or users_table
    try:
        response = table.get_item(Key={"user_id": user_id})
    except ClientError as e:
        logger.error(f"get_user_budgets failed: {e.response['Error']['Message']}")
        return None
    item = response.get("Item")
    if not item:
        return None
    budgets = item.get("budgets")
    if not isinstance(budgets, dict):
        if budgets is not None:
            logger.error(f"Ignoring budgets on {user_id}: expected a map, got {type(budgets).__name__}")
        return None
    return budgets or None


def save_user_budgets(user_id: str, budgets: Mapping[str, Decimal], table=None) -> None:
    """
    Write the full budget mapping onto the user's record.
    Other attributes of the record are left untouched.
    """
    table = table or users_table
    try:
        table.update_item(
            Key={"user_id": user_id},
            UpdateExpression="SET #b = :b, #u = :u",
            ExpressionAttributeNames={"#b": "budgets", "#u": "budgets_updated_at"},
            ExpressionAttributeValues=_convert_for_dynamo({
                ":b": dict(budgets),
                ":u": datetime.now(timezone.utc).isoformat(),
            }),
        )
    except ClientError as e:
        logger.error(f"save_user_budgets failed: {e.response['Error']['Message']}")
        raise BudgetPersistenceError(
            "Failed to save budgets", details={"user_id": user_id}, original_error=e
        ) from e
    except DecimalException as e:
        # Raised by the boto3 serializer for numbers DynamoDB cannot represent
        logger.error(f"save_user_budgets could not serialize budgets: {e!r}")
        raise BudgetPersistenceError(
            "Budgets are not representable in DynamoDB", details={"user_id": user_id}, original_error=e
        ) from e


def _convert_for_dynamo(obj: Any):
    """
    Recursively convert floats to Decimal for DynamoDB compatibility.
    """
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _convert_for_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_for_dynamo(v) for v in obj]
    return obj
