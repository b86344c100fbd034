from botocore.exceptions import ClientError

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def is_conditional_check_failed(error: ClientError) -> bool:
    """条件付き書き込みの失敗かどうか"""
    return error.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED


def scan_all(table, **kwargs) -> list[dict]:
    """ページングを辿って scan の全件を取得する"""
    items: list[dict] = []
    while True:
        response = table.scan(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key


def query_all(table, **kwargs) -> list[dict]:
    """ページングを辿って query の全件を取得する"""
    items: list[dict] = []
    while True:
        response = table.query(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key
