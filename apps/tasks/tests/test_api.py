"""
Integration tests for the Tasks API endpoints.

Requests go through the full URLconf, so the token gate, validation,
store and exception handlers are all exercised together.
"""
import json
from unittest import mock

from asgiref.sync import async_to_sync
from django.conf import settings
from django.test import SimpleTestCase, Client

from apps.identity.jwt_auth import create_access_token
from config.urls import task_store


def make_token(email="student@example.com", secret=None, **kwargs):
    """Sign a token the way a client would receive it."""
    return create_access_token({'email': email}, secret or settings.JWT_SECRET, **kwargs)


class TaskAPITestCase(SimpleTestCase):

    def setUp(self):
        async_to_sync(task_store.reset)()
        self.client = Client()
        self.token = make_token()

    def post_task(self, body, token=None):
        headers = {'HTTP_AUTHORIZATION': token} if token is not None else {}
        return self.client.post(
            '/create',
            data=json.dumps(body),
            content_type='application/json',
            **headers,
        )

    def delete_task(self, task_id, token=None):
        headers = {'HTTP_AUTHORIZATION': token} if token is not None else {}
        return self.client.delete(f'/{task_id}', **headers)

    def stored_tasks(self):
        return async_to_sync(task_store.get_all)()


class ListTasksTest(TaskAPITestCase):

    def test_empty_list(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_list_requires_no_token(self):
        async_to_sync(task_store.create)("Public task")
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [{'id': 1, 'description': 'Public task'}])

    def test_list_in_creation_order(self):
        for description in ("first", "second", "third"):
            self.post_task({'task': {'description': description}}, token=self.token)

        data = self.client.get('/').json()
        self.assertEqual([t['id'] for t in data], [1, 2, 3])
        self.assertEqual([t['description'] for t in data], ["first", "second", "third"])

    def test_unexpected_failure_returns_generic_500(self):
        with mock.patch.object(task_store, 'get_all', side_effect=RuntimeError("db exploded")):
            with self.assertLogs('apps.core.errors', level='ERROR'):
                response = self.client.get('/')

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'error': 'Internal server error'})
        self.assertNotIn('exploded', response.content.decode())


class CreateTaskTest(TaskAPITestCase):

    def test_create_without_token(self):
        response = self.post_task({'task': {'description': 'Test task'}})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'message': 'No token provided'})
        self.assertEqual(self.stored_tasks(), [])

    def test_create_with_invalid_token(self):
        response = self.post_task({'task': {'description': 'Test task'}}, token='invalid-token')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Failed to authenticate token')
        self.assertEqual(self.stored_tasks(), [])

    def test_create_with_token_signed_by_other_secret(self):
        token = make_token(secret='not-the-service-secret')
        response = self.post_task({'task': {'description': 'Test task'}}, token=token)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Failed to authenticate token')

    def test_create_with_expired_token(self):
        token = make_token(expires_minutes=-1)
        response = self.post_task({'task': {'description': 'Test task'}}, token=token)
        self.assertEqual(response.status_code, 401)

    def test_bearer_prefix_is_not_accepted(self):
        response = self.post_task(
            {'task': {'description': 'Test task'}},
            token=f'Bearer {self.token}',
        )
        self.assertEqual(response.status_code, 401)

    def test_create_with_token(self):
        response = self.post_task({'task': {'description': 'Test task'}}, token=self.token)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json(), {'id': 1, 'description': 'Test task'})

    def test_created_task_appears_in_list(self):
        self.post_task({'task': {'description': 'Test task'}}, token=self.token)

        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [{'id': 1, 'description': 'Test task'}])

    def test_description_is_trimmed(self):
        response = self.post_task({'task': {'description': '   Buy milk  '}}, token=self.token)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['description'], 'Buy milk')

    def test_null_task(self):
        response = self.post_task({'task': None}, token=self.token)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Task is required'})

    def test_missing_task(self):
        response = self.post_task({}, token=self.token)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Task is required'})

    def test_missing_description(self):
        response = self.post_task({'task': {}}, token=self.token)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Task is required'})

    def test_empty_description(self):
        response = self.post_task({'task': {'description': ''}}, token=self.token)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Task is required'})

    def test_description_too_short(self):
        response = self.post_task({'task': {'description': 'A'}}, token=self.token)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Description too short'})

    def test_description_too_short_after_trim(self):
        response = self.post_task({'task': {'description': '  ab   '}}, token=self.token)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Description too short'})

    def test_whitespace_only_description(self):
        response = self.post_task({'task': {'description': '     '}}, token=self.token)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Description too short'})

    def test_three_characters_is_enough(self):
        response = self.post_task({'task': {'description': 'abc'}}, token=self.token)
        self.assertEqual(response.status_code, 201)

    def test_rejected_create_does_not_consume_an_id(self):
        self.post_task({'task': {'description': 'A'}}, token=self.token)
        response = self.post_task({'task': {'description': 'Real task'}}, token=self.token)
        self.assertEqual(response.json()['id'], 1)

    def test_auth_checked_before_validation(self):
        response = self.post_task({'task': None})
        self.assertEqual(response.status_code, 401)


class DeleteTaskTest(TaskAPITestCase):

    def test_delete_removes_task(self):
        self.post_task({'task': {'description': 'Task to delete'}}, token=self.token)

        response = self.delete_task(1, token=self.token)
        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.content, b'')

        listing = self.client.get('/')
        self.assertEqual(listing.status_code, 200)
        self.assertEqual(listing.json(), [])

    def test_delete_only_matching_task(self):
        for description in ("keep one", "drop me", "keep two"):
            self.post_task({'task': {'description': description}}, token=self.token)

        self.assertEqual(self.delete_task(2, token=self.token).status_code, 204)

        data = self.client.get('/').json()
        self.assertEqual(data, [
            {'id': 1, 'description': 'keep one'},
            {'id': 3, 'description': 'keep two'},
        ])

    def test_delete_missing_task(self):
        response = self.delete_task(999, token=self.token)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Task not found'})

    def test_delete_twice(self):
        self.post_task({'task': {'description': 'Only once'}}, token=self.token)
        self.assertEqual(self.delete_task(1, token=self.token).status_code, 204)
        self.assertEqual(self.delete_task(1, token=self.token).status_code, 404)

    def test_delete_non_numeric_id(self):
        self.post_task({'task': {'description': 'Stays put'}}, token=self.token)
        response = self.delete_task('abc', token=self.token)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(len(self.stored_tasks()), 1)

    def test_delete_without_token(self):
        self.post_task({'task': {'description': 'Protected'}}, token=self.token)

        response = self.delete_task(1)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(len(self.stored_tasks()), 1)

    def test_delete_with_invalid_token(self):
        self.post_task({'task': {'description': 'Protected'}}, token=self.token)

        response = self.delete_task(1, token='invalid-token')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Failed to authenticate token')
        self.assertEqual(len(self.stored_tasks()), 1)

    def test_ids_keep_increasing_after_delete(self):
        self.post_task({'task': {'description': 'first'}}, token=self.token)
        self.delete_task(1, token=self.token)

        response = self.post_task({'task': {'description': 'second'}}, token=self.token)
        self.assertEqual(response.json()['id'], 2)
