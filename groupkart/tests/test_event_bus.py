import unittest
from groupkart.domain.User import User
from groupkart.events.Event_Bus import EventBus, CART_ALLERGY_ALERT, CART_BUDGET_ALERT
from groupkart.events.event_helpers import publish_allergy_alert, publish_budget_alert


class TestEventBus(unittest.TestCase):

    def setUp(self):
        self.bus = EventBus()
        self.received = []

    def _listener(self, event_name, payload):
        self.received.append((event_name, payload))

    def test_subscribe_once_and_unsubscribe(self):
        self.bus.subscribe("x", self._listener)
        self.bus.subscribe("x", self._listener)
        self.bus.publish("x", 1)
        self.bus.unsubscribe("x", self._listener)
        self.bus.unsubscribe("x", self._listener)
        self.bus.publish("x", 2)
        self.assertEqual(self.received, [("x", 1)])

    def test_failing_subscriber_does_not_block_others(self):
        def broken(event_name, payload):
            raise RuntimeError("boom")
        self.bus.subscribe("x", broken)
        self.bus.subscribe("x", self._listener)
        with self.assertLogs("groupkart.events.Event_Bus", level="ERROR"):
            self.bus.publish("x", "payload")
        self.assertEqual(self.received, [("x", "payload")])

    def test_alert_helpers(self):
        self.bus.subscribe(CART_ALLERGY_ALERT, self._listener)
        self.bus.subscribe(CART_BUDGET_ALERT, self._listener)
        alice, bob = User.create("Alice"), User.create("Bob")
        publish_allergy_alert(self.bus, "c1", "Peanut Bar", [])
        publish_allergy_alert(self.bus, "c1", "Peanut Bar", [alice, bob])
        publish_budget_alert(self.bus, "c1", "Snacks", 20)
        self.assertEqual(len(self.received), 2)
        name, payload = self.received[0]
        self.assertEqual(name, CART_ALLERGY_ALERT)
        self.assertEqual(payload["message"], "Alice, Bob are allergic to ingredients in this item.")
        self.assertEqual(self.received[1][1], {"cart_id": "c1", "category": "Snacks", "over_by": 20})
