from unittest.mock import MagicMock

from services.shared.domain.sink import NotificationType
from services.shared.infrastructure import InMemoryNotificationQueue
from services.shared.utils import CompensationStack, run_side_effect


class TestRunSideEffect:
    def test_calls_function(self):
        func = MagicMock()
        run_side_effect(MagicMock(), "audit", func, "a", key="b")
        func.assert_called_once_with("a", key="b")

    def test_failure_is_logged_not_raised(self):
        logger = MagicMock()
        func = MagicMock(side_effect=RuntimeError("sink down"))

        run_side_effect(logger, "audit", func)

        logger.exception.assert_called_once()
        assert logger.exception.call_args.kwargs["extra"] == {"side_effect": "audit"}


class TestCompensationStack:
    def test_unwind_runs_in_reverse_order(self):
        calls = []
        stack = CompensationStack(MagicMock())
        stack.push("first", lambda: calls.append("first"))
        stack.push("second", lambda: calls.append("second"))

        stack.unwind()

        assert calls == ["second", "first"]

    def test_failing_action_does_not_stop_unwind(self):
        logger = MagicMock()
        calls = []
        stack = CompensationStack(logger)
        stack.push("first", lambda: calls.append("first"))
        stack.push("broken", MagicMock(side_effect=RuntimeError("boom")))

        stack.unwind()

        assert calls == ["first"]
        logger.exception.assert_called_once()

    def test_unwind_is_single_shot(self):
        action = MagicMock()
        stack = CompensationStack(MagicMock())
        stack.push("action", action)
        stack.unwind()
        stack.unwind()
        action.assert_called_once()


class TestInMemoryNotificationQueue:
    def test_fifo_order(self):
        queue = InMemoryNotificationQueue(MagicMock())
        queue.enqueue(NotificationType.EMAIL, "a@example.com", "first", "body")
        queue.enqueue(NotificationType.SMS, "712345678", "second", "body")

        assert queue.pending_count() == 2
        assert queue.next_notification().subject == "first"
        assert queue.next_notification().subject == "second"
        assert queue.next_notification() is None

    def test_listener_failure_is_isolated(self):
        logger = MagicMock()
        queue = InMemoryNotificationQueue(logger)
        received = []
        queue.register_listener(MagicMock(side_effect=RuntimeError("smtp down")))
        queue.register_listener(received.append)

        notification = queue.enqueue(
            NotificationType.EMAIL, "a@example.com", "subject", "body"
        )

        assert received == [notification]
        assert queue.pending_count() == 1
        logger.exception.assert_called_once()
