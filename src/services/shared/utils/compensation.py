from typing import Any, Callable

from aws_lambda_powertools import Logger


class CompensationStack:
    """補償処理のスタック

    書き込みが成功するたびに、それを打ち消す処理を積んでおく。
    後続の書き込みが失敗したら unwind() で逆順に実行する。
    補償処理自体の失敗はログに残し、残りの補償処理を続ける。
    """

    def __init__(self, logger: Logger) -> None:
        self._logger = logger
        self._actions: list[tuple[str, Callable[[], Any]]] = []

    def push(self, description: str, action: Callable[[], Any]) -> None:
        self._actions.append((description, action))

    def unwind(self) -> None:
        while self._actions:
            description, action = self._actions.pop()
            try:
                action()
            except Exception:
                self._logger.exception(
                    "Compensation failed", extra={"compensation": description}
                )
