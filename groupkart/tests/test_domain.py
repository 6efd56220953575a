import unittest
from groupkart.domain.Cart import Cart, CartState
from groupkart.domain.CartItem import CartItem, NO_SWAP, SwapPending, swap_from_dict
from groupkart.domain.User import User


class TestUser(unittest.TestCase):

    def test_create_generates_ids(self):
        a = User.create(" Alice ", ["Peanuts", "Peanuts", " ", "Soy"])
        b = User.create("Alice")
        self.assertNotEqual(a.id, b.id)
        self.assertEqual(a.name, "Alice")
        self.assertEqual(a.allergies, ("Peanuts", "Soy"))

    def test_from_dict_ignores_unknown_keys(self):
        user = User.from_dict({"id": "u1", "name": "Bob", "allergies": ["Fish"], "avatar": "x.png"})
        self.assertEqual(user, User("u1", "Bob", ("Fish",)))
        self.assertEqual(user.to_dict(), {"id": "u1", "name": "Bob", "allergies": ["Fish"]})


class TestCartItem(unittest.TestCase):

    def test_swap_variants(self):
        self.assertIs(swap_from_dict(None), NO_SWAP)
        self.assertIs(swap_from_dict({}), NO_SWAP)
        swap = swap_from_dict({"name": "Store Chips", "price": 84, "reason": "cheaper"})
        self.assertEqual(swap, SwapPending("Store Chips", 84, "cheaper"))

    def test_with_swap_applied(self):
        item = CartItem("i1", "Chips", 120, "Snacks", ("potato",), "u1", SwapPending("Store Chips", 84))
        swapped = item.with_swap_applied()
        self.assertEqual((swapped.name, swapped.price), ("Store Chips", 84))
        self.assertIs(swapped.swap, NO_SWAP)
        self.assertEqual(item.price, 120)
        with self.assertRaises(ValueError):
            swapped.with_swap_applied()

    def test_swap_price_bounds(self):
        with self.assertRaises(ValueError):
            SwapPending("Store Chips", -1)
        with self.assertRaises(ValueError):
            swap_from_dict({"name": "Store Chips", "price": -0.5})
        with self.assertRaises(ValueError):
            CartItem("i1", "Chips", 80, "Snacks", swap=SwapPending("Store Chips", 84))
        item = CartItem("i1", "Chips", 84, "Snacks", swap=SwapPending("Store Chips", 84))
        self.assertEqual(item.with_swap_applied().price, 84)

    def test_to_dict_omits_cleared_swap(self):
        item = CartItem("i1", "Chips", 120, "Snacks", ("potato",), "u1")
        self.assertNotIn("suggestedSwap", item.to_dict())
        self.assertEqual(item.to_dict()["addedBy"], "u1")


class TestCartState(unittest.TestCase):

    def test_dict_round_trip_uses_camel_case(self):
        alice = User("u1", "Alice", ("Peanuts",))
        item = CartItem("i1", "Chips", 120, "Snacks", ("potato",), "u1", SwapPending("Store Chips", 84, "r"))
        cart = Cart("c1", "Groceries", (alice,), {"Snacks": 100}, (item,), 12, 1)
        state = CartState({"c1": cart}, current_user=alice)

        data = state.to_dict()
        self.assertEqual(data["currentUser"]["id"], "u1")
        raw_cart = data["carts"]["c1"]
        self.assertEqual(raw_cart["categoryBudgets"], {"Snacks": 100})
        self.assertEqual(raw_cart["smartSwapsAccepted"], 1)
        self.assertEqual(raw_cart["items"][0]["suggestedSwap"]["price"], 84)
        self.assertEqual(CartState.from_dict(data), state)

    def test_snapshots_compare_by_value_but_are_unhashable(self):
        cart = Cart("c1", "Groceries", (), {"Snacks": 100})
        same = Cart("c1", "Groceries", (), {"Snacks": 100})
        self.assertEqual(cart, same)
        self.assertIsNone(Cart.__hash__)
        self.assertIsNone(CartState.__hash__)
        with self.assertRaises(TypeError):
            hash(cart)
        with self.assertRaises(TypeError):
            {CartState({"c1": cart})}

    def test_from_dict_defaults_missing_fields(self):
        state = CartState.from_dict({"carts": {"c9": {"name": "Bare"}}})
        cart = state.carts["c9"]
        self.assertEqual(cart.items, ())
        self.assertEqual(cart.total_savings, 0)
        self.assertIsNone(state.current_user)
