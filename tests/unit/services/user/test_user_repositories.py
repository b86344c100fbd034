from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from services.shared.domain import DuplicateResourceException, UserId
from services.user.domain import User
from services.user.infrastructure import (
    DynamoDBUserRepository,
    InMemoryUserRepository,
)


@pytest.fixture
def create_user():
    def _factory(user_id: str = "user-1", email: str = "Nimal@Example.com") -> User:
        return User(id=UserId(value=user_id), username="nimal", email=email)

    return _factory


class TestUser:
    @pytest.mark.parametrize(
        "email,expected",
        [
            ("nimal@example.com", True),
            (" NIMAL@EXAMPLE.COM ", True),
            ("kamal@example.com", False),
        ],
    )
    def test_has_email(self, create_user, email, expected):
        assert create_user().has_email(email) is expected


class TestInMemoryUserRepository:
    def test_save_and_find(self, create_user):
        repository = InMemoryUserRepository()
        repository.save(create_user())

        user = repository.find_by_id(UserId(value="user-1"))

        assert user.username == "nimal"
        assert repository.find_by_id(UserId(value="other")) is None

    def test_duplicate(self, create_user):
        repository = InMemoryUserRepository()
        repository.save(create_user())
        with pytest.raises(DuplicateResourceException):
            repository.save(create_user())


class TestDynamoDBUserRepository:
    def test_save_and_find(self, create_user):
        table = MagicMock()
        repository = DynamoDBUserRepository(table_name="test-table", table=table)

        repository.save(create_user())
        item = table.put_item.call_args.kwargs["Item"]
        table.get_item.return_value = {"Item": item}
        user = repository.find_by_id(UserId(value="user-1"))

        assert item["PK"] == "USER#user-1"
        assert user.email == "Nimal@Example.com"

    def test_find_missing(self):
        table = MagicMock()
        table.get_item.return_value = {}
        repository = DynamoDBUserRepository(table_name="test-table", table=table)
        assert repository.find_by_id(UserId(value="missing")) is None

    def test_duplicate(self, create_user):
        table = MagicMock()
        table.put_item.side_effect = ClientError(
            {"Error": {"Code": "ConditionalCheckFailedException"}}, "PutItem"
        )
        repository = DynamoDBUserRepository(table_name="test-table", table=table)
        with pytest.raises(DuplicateResourceException):
            repository.save(create_user())
