"""Unit tests for MongoUserRepository against a mocked collection."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError, ServerSelectionTimeoutError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DuplicateEmailError, NotFoundError, StoreUnavailableError


def _user_doc(**overrides) -> dict:
    now = datetime(2026, 1, 23, 12, 0, 0, tzinfo=timezone.utc)
    doc = {
        '_id': 'user-1',
        'name': 'Ann',
        'email': 'ann@x.com',
        'password_hash': '$2b$12$hash',
        'created_at': now,
        'updated_at': now,
    }
    doc.update(overrides)
    return doc


class MongoUserRepositoryTestCase(unittest.TestCase):
    def setUp(self):
        self.collection = MagicMock()
        self.db = MagicMock()
        self.db.__getitem__.return_value = self.collection
        self.repo = MongoUserRepository(self.db)


class TestCreate(MongoUserRepositoryTestCase):

    @patch('adapter.mongodb.user_repository.uuid')
    def test_create_inserts_document_and_hides_hash(self, mock_uuid):
        mock_uuid.uuid4.return_value.hex = 'new-user-id'

        user = self.repo.create(name='Ann', email='ann@x.com', password_hash='$2b$12$hash')

        self.db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)
        doc = self.collection.insert_one.call_args[0][0]
        self.assertEqual(doc['_id'], 'new-user-id')
        self.assertEqual(doc['email'], 'ann@x.com')
        self.assertEqual(doc['password_hash'], '$2b$12$hash')
        self.assertEqual(doc['created_at'], doc['updated_at'])
        self.assertEqual(user.id, 'new-user-id')
        self.assertIsNone(user.password_hash)

    def test_create_duplicate_key_raises_duplicate_email(self):
        self.collection.insert_one.side_effect = DuplicateKeyError('E11000 duplicate key error')

        with self.assertRaises(DuplicateEmailError):
            self.repo.create(name='Ann', email='ann@x.com', password_hash='h')

    def test_create_driver_error_is_wrapped(self):
        self.collection.insert_one.side_effect = ServerSelectionTimeoutError('no servers at mongo:27017')

        with self.assertRaises(StoreUnavailableError) as ctx:
            self.repo.create(name='Ann', email='ann@x.com', password_hash='h')
        self.assertNotIn('mongo:27017', str(ctx.exception))


class TestReads(MongoUserRepositoryTestCase):

    def test_exists_true(self):
        self.collection.count_documents.return_value = 1

        self.assertTrue(self.repo.exists('ann@x.com'))
        self.collection.count_documents.assert_called_once_with({'email': 'ann@x.com'}, limit=1)

    def test_exists_false(self):
        self.collection.count_documents.return_value = 0

        self.assertFalse(self.repo.exists('ann@x.com'))

    def test_find_by_email_returns_hash(self):
        self.collection.find_one.return_value = _user_doc()

        user = self.repo.find_by_email('ann@x.com')

        self.assertEqual(user.id, 'user-1')
        self.assertEqual(user.password_hash, '$2b$12$hash')
        self.collection.find_one.assert_called_once_with({'email': 'ann@x.com'})

    def test_find_by_email_missing(self):
        self.collection.find_one.return_value = None

        self.assertIsNone(self.repo.find_by_email('nobody@x.com'))

    def test_get_by_id_projects_out_hash(self):
        doc = _user_doc()
        del doc['password_hash']
        self.collection.find_one.return_value = doc

        user = self.repo.get_by_id('user-1')

        self.assertIsNone(user.password_hash)
        self.collection.find_one.assert_called_once_with({'_id': 'user-1'}, {'password_hash': 0})

    def test_read_errors_are_wrapped(self):
        self.collection.find_one.side_effect = PyMongoError('boom')
        self.collection.count_documents.side_effect = PyMongoError('boom')

        with self.assertRaises(StoreUnavailableError):
            self.repo.exists('ann@x.com')
        with self.assertRaises(StoreUnavailableError):
            self.repo.find_by_email('ann@x.com')
        with self.assertRaises(StoreUnavailableError):
            self.repo.get_by_id('user-1')


class TestTouchLogin(MongoUserRepositoryTestCase):

    def test_touch_login_uses_max_and_returns_timestamp(self):
        stored = datetime(2026, 2, 1, tzinfo=timezone.utc)
        self.collection.find_one_and_update.return_value = {'_id': 'user-1', 'updated_at': stored}

        result = self.repo.touch_login('user-1')

        self.assertEqual(result, stored)
        args, kwargs = self.collection.find_one_and_update.call_args
        self.assertEqual(args[0], {'_id': 'user-1'})
        self.assertIn('$max', args[1])
        self.assertIn('updated_at', args[1]['$max'])
        self.assertEqual(kwargs['return_document'], ReturnDocument.AFTER)

    def test_touch_login_missing_user(self):
        self.collection.find_one_and_update.return_value = None

        with self.assertRaises(NotFoundError):
            self.repo.touch_login('missing')

    def test_touch_login_error_propagates(self):
        self.collection.find_one_and_update.side_effect = PyMongoError('boom')

        with self.assertRaises(StoreUnavailableError):
            self.repo.touch_login('user-1')


class TestEnsureIndexes(MongoUserRepositoryTestCase):

    def test_creates_unique_email_index(self):
        self.assertTrue(self.repo.ensure_indexes())

        self.collection.create_index.assert_any_call(
            [('email', 1)], name='idx_users_email', unique=True
        )
        self.collection.create_index.assert_any_call(
            [('created_at', -1)], name='idx_users_created_at'
        )

    def test_returns_false_on_error(self):
        self.collection.create_index.side_effect = PyMongoError('not authorized')

        self.assertFalse(self.repo.ensure_indexes())


if __name__ == '__main__':
    unittest.main()
