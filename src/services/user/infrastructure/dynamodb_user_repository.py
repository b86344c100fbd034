import os

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from services.shared.domain import DuplicateResourceException, UserId
from services.shared.utils.dynamodb import is_conditional_check_failed
from services.user.domain import User, UserRepository


class DynamoDBUserRepository(UserRepository):
    """DynamoDBを使用したUserRepository の具象実装"""

    def __init__(self, table_name: str | None = None, table=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        if table is None:
            table = boto3.resource("dynamodb").Table(self.table_name)
        self.table = table

    def save(self, user: User) -> None:
        item = {
            "PK": f"USER#{user.id}",
            "SK": "PROFILE",
            "entity_type": "USER",
            "user_id": str(user.id),
            "username": user.username,
            "email": user.email,
        }
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if is_conditional_check_failed(e):
                raise DuplicateResourceException(f"User already exists: {user.id}")
            raise

    def find_by_id(self, user_id: UserId) -> User | None:
        response = self.table.get_item(
            Key={"PK": f"USER#{user_id}", "SK": "PROFILE"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return User(
            id=UserId(value=item["user_id"]),
            username=item["username"],
            email=item["email"],
        )
