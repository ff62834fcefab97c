import unittest
from unittest.mock import MagicMock
import sys
import os

# Add project root to path
sys.path.append(os.getcwd())

from agent.bot import BotState
from agent.publisher import Publisher, PublishError


class TestPublisher(unittest.TestCase):
    def setUp(self):
        self.adapter = MagicMock()
        self.adapter.post.return_value = "1790000000000000001"
        self.state = BotState()
        self.publisher = Publisher(self.adapter, self.state, max_length=280)

    def test_publish_increments_counter(self):
        post_id = self.publisher.publish("gm crypto")

        self.assertEqual(post_id, "1790000000000000001")
        self.adapter.post.assert_called_once_with("gm crypto")
        self.assertEqual(self.state.post_count, 1)

    def test_long_text_hard_truncated(self):
        self.publisher.publish("word " * 100)

        posted = self.adapter.post.call_args[0][0]
        self.assertEqual(len(posted), 280)
        self.assertTrue(posted.endswith("..."))

    def test_api_failure_propagates(self):
        self.adapter.post.side_effect = RuntimeError("403 Forbidden")

        with self.assertRaises(PublishError):
            self.publisher.publish("gm")
        self.assertEqual(self.state.post_count, 0)

    def test_missing_id_is_failure(self):
        self.adapter.post.return_value = None

        with self.assertRaises(PublishError):
            self.publisher.publish("gm")
        self.assertEqual(self.state.post_count, 0)


if __name__ == '__main__':
    unittest.main()
