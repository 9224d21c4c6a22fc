import unittest
from unittest.mock import MagicMock
from uuid import UUID

from fakes import FailingSubscriptionRepository, InMemorySubscriptionRepository

from subscription_tracker.application.services.subscription_service import SubscriptionService
from subscription_tracker.domain.errors import PersistenceError
from subscription_tracker.domain.models import RequestContext, Subscription

USER = UUID("11111111-1111-1111-1111-111111111111")
CTX = RequestContext(request_id="req-42", trace_id="trace-42")
LOGGER = "subscription_tracker.application.services.subscription_service"


class TestSubscriptionService(unittest.TestCase):
    def setUp(self):
        self.repo = InMemorySubscriptionRepository()
        self.service = SubscriptionService(self.repo)

    def test_operations_delegate_to_repository(self):
        created = self.service.insert(
            CTX, Subscription(name="Premium", price=100, user_id=USER, start_date="2025-11")
        )

        self.assertEqual(created.id, 1)
        self.assertEqual(self.service.get_by_name_and_user(CTX, "Premium", USER), created)
        self.assertEqual(self.service.list(CTX, 10, 0), [created])
        self.assertEqual(self.service.sum_price(CTX, "", USER, "2025-11", ""), 100)

        self.service.delete(CTX, "Premium", USER)
        self.assertIsNone(self.service.get_by_name_and_user(CTX, "Premium", USER))

    def test_request_context_is_passed_through(self):
        repo = MagicMock()
        repo.sum_price.return_value = 7
        service = SubscriptionService(repo)

        self.assertEqual(service.sum_price(CTX, "Netflix", USER, "2025-01", "2025-12"), 7)
        repo.sum_price.assert_called_once_with(CTX, "Netflix", USER, "2025-01", "2025-12")

    def test_calls_are_traced_with_correlation_ids(self):
        with self.assertLogs(LOGGER, level="DEBUG") as logs:
            self.service.list(CTX, 5, 0)

        self.assertTrue(any("Service.list called" in line for line in logs.output))
        self.assertTrue(all(record.request_id == "req-42" for record in logs.records))
        self.assertTrue(all(record.trace_id == "trace-42" for record in logs.records))


class TestSubscriptionServiceFailures(unittest.TestCase):
    def setUp(self):
        self.service = SubscriptionService(FailingSubscriptionRepository())

    def test_errors_are_logged_and_reraised(self):
        subscription = Subscription(name="Premium", price=100, user_id=USER, start_date="2025-11")
        calls = {
            "insert": lambda: self.service.insert(CTX, subscription),
            "update": lambda: self.service.update(CTX, subscription),
            "delete": lambda: self.service.delete(CTX, "Premium", USER),
            "get_by_name_and_user": lambda: self.service.get_by_name_and_user(CTX, "Premium", USER),
            "sum_price": lambda: self.service.sum_price(CTX, "", USER, "2025-01", ""),
        }
        for operation, call in calls.items():
            with self.subTest(operation=operation):
                with self.assertLogs(LOGGER, level="ERROR") as logs:
                    with self.assertRaises(PersistenceError):
                        call()
                self.assertIn(f"Service.{operation} error", logs.output[0])

    def test_list_never_raises(self):
        self.assertEqual(self.service.list(CTX, 10, 0), [])


if __name__ == "__main__":
    unittest.main()
