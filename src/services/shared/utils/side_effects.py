from typing import Any, Callable

from aws_lambda_powertools import Logger


def run_side_effect(
    logger: Logger,
    description: str,
    func: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> None:
    """監査ログ・通知などの副作用をベストエフォートで実行する

    副作用の失敗は主処理をロールバックさせない。ログに残して握りつぶす。
    """
    try:
        func(*args, **kwargs)
    except Exception:
        logger.exception("Side effect failed", extra={"side_effect": description})
