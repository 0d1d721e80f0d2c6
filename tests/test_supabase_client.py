import unittest
from unittest.mock import MagicMock, patch

from uniagora.database import supabase_client
from uniagora.database.supabase_client import SupabaseClient


class UserClientCacheTests(unittest.TestCase):
    def setUp(self):
        SupabaseClient.reset_client()
        self.addCleanup(SupabaseClient.reset_client)
        patcher = patch.object(supabase_client, "create_client", side_effect=lambda *a: MagicMock())
        self.create_client = patcher.start()
        self.addCleanup(patcher.stop)

    def test_same_token_reuses_client(self):
        first = SupabaseClient.get_user_client("alice-token")
        second = SupabaseClient.get_user_client("alice-token")
        self.assertIs(first, second)
        self.assertEqual(self.create_client.call_count, 1)
        first.postgrest.auth.assert_called_once_with("alice-token")

    def test_each_token_gets_its_own_client(self):
        alice = SupabaseClient.get_user_client("alice-token")
        bob = SupabaseClient.get_user_client("bob-token")
        self.assertIsNot(alice, bob)
        bob.postgrest.auth.assert_called_once_with("bob-token")

    def test_expired_entry_is_rebuilt(self):
        with patch.object(supabase_client.time, "monotonic", return_value=1000.0):
            first = SupabaseClient.get_user_client("alice-token")
        with patch.object(
            supabase_client.time, "monotonic",
            return_value=1000.0 + supabase_client._USER_CLIENT_TTL_SEC + 1,
        ):
            second = SupabaseClient.get_user_client("alice-token")
        self.assertIsNot(first, second)
        self.assertEqual(self.create_client.call_count, 2)

    def test_cache_is_bounded(self):
        with patch.object(supabase_client, "_USER_CLIENT_MAX_SIZE", 2):
            oldest = SupabaseClient.get_user_client("t1")
            SupabaseClient.get_user_client("t2")
            SupabaseClient.get_user_client("t3")
            self.assertEqual(len(SupabaseClient._user_clients), 2)
            self.assertIsNot(SupabaseClient.get_user_client("t1"), oldest)


if __name__ == "__main__":
    unittest.main()
