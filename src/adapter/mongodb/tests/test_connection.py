"""Unit tests for MongoDB client lifecycle helpers."""

import unittest
from unittest.mock import MagicMock, patch

from pymongo.errors import ServerSelectionTimeoutError

from adapter.mongodb.connection import close_client, open_client, ping
from domain.model.errors import StoreUnavailableError


class TestOpenClient(unittest.TestCase):

    def test_missing_url_raises(self):
        with self.assertRaises(StoreUnavailableError):
            open_client(None)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_connects_and_pings(self, mock_client_class):
        client = open_client('mongodb://localhost:27017')

        self.assertIs(client, mock_client_class.return_value)
        mock_client_class.return_value.admin.command.assert_called_once_with('ping')

    @patch('adapter.mongodb.connection.MongoClient')
    def test_unreachable_server_raises(self, mock_client_class):
        mock_client_class.return_value.admin.command.side_effect = ServerSelectionTimeoutError('timeout')

        with self.assertRaises(StoreUnavailableError):
            open_client('mongodb://localhost:27017')


class TestPingAndClose(unittest.TestCase):

    def test_ping_none_client(self):
        self.assertFalse(ping(None))

    def test_ping_healthy(self):
        self.assertTrue(ping(MagicMock()))

    def test_ping_failure(self):
        client = MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError('timeout')

        self.assertFalse(ping(client))

    def test_close_client(self):
        client = MagicMock()

        close_client(client)

        client.close.assert_called_once()

    def test_close_none_is_noop(self):
        close_client(None)


if __name__ == '__main__':
    unittest.main()
