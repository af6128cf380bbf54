from io import StringIO

import jwt
from django.core.management import call_command
from django.test import SimpleTestCase, RequestFactory, override_settings

from apps.core.errors import AuthMissing, AuthInvalid
from .jwt_auth import create_access_token, decode_token
from .security import Identity, TokenHeaderAuth

SECRET = "test-secret"


class JWTAuthTest(SimpleTestCase):
    def test_round_trip_keeps_claims(self):
        token = create_access_token({'email': 'student@example.com'}, SECRET)
        payload = decode_token(token, SECRET)
        self.assertEqual(payload['email'], 'student@example.com')
        self.assertIn('iat', payload)
        self.assertNotIn('exp', payload)

    def test_expiry_is_optional(self):
        token = create_access_token({'sub': 'u1'}, SECRET, expires_minutes=5)
        self.assertIn('exp', decode_token(token, SECRET))

    def test_expired_token(self):
        token = create_access_token({'sub': 'u1'}, SECRET, expires_minutes=-1)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_token(token, SECRET)

    def test_wrong_secret(self):
        token = create_access_token({'sub': 'u1'}, "other-secret")
        with self.assertRaises(jwt.InvalidTokenError):
            decode_token(token, SECRET)

    def test_malformed_token(self):
        with self.assertRaises(jwt.InvalidTokenError):
            decode_token("invalid-token", SECRET)


class TokenHeaderAuthTest(SimpleTestCase):
    def setUp(self):
        self.auth = TokenHeaderAuth(secret=SECRET)
        self.factory = RequestFactory()

    def request_with(self, token=None):
        extra = {'HTTP_AUTHORIZATION': token} if token is not None else {}
        return self.factory.post('/create', **extra)

    def test_requires_secret(self):
        with self.assertRaises(ValueError):
            TokenHeaderAuth(secret="")

    def test_missing_header(self):
        with self.assertRaises(AuthMissing):
            self.auth(self.request_with())

    def test_empty_header(self):
        with self.assertRaises(AuthMissing):
            self.auth(self.request_with(""))

    def test_invalid_token(self):
        with self.assertRaises(AuthInvalid) as ctx:
            self.auth(self.request_with("invalid-token"))
        self.assertEqual(ctx.exception.message, "Failed to authenticate token")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_valid_token_returns_identity(self):
        token = create_access_token({'email': 'student@example.com'}, SECRET)
        identity = self.auth(self.request_with(token))
        self.assertIsInstance(identity, Identity)
        self.assertEqual(identity.subject, 'student@example.com')

    def test_identity_with_no_claims_still_passes(self):
        token = jwt.encode({}, SECRET, algorithm='HS256')
        identity = self.auth(self.request_with(token))
        self.assertTrue(identity)
        self.assertIsNone(identity.subject)

    def test_raw_token_only(self):
        token = create_access_token({'sub': 'u1'}, SECRET)
        with self.assertRaises(AuthInvalid):
            self.auth(self.request_with(f"Bearer {token}"))


@override_settings(JWT_SECRET=SECRET)
class IssueTokenCommandTest(SimpleTestCase):
    def test_prints_verifiable_token(self):
        out = StringIO()
        call_command('issue_token', '--subject', 'ops@example.com', stdout=out)
        payload = decode_token(out.getvalue().strip(), SECRET)
        self.assertEqual(payload['sub'], 'ops@example.com')
        self.assertNotIn('exp', payload)

    def test_with_expiry(self):
        out = StringIO()
        call_command('issue_token', '--expires-minutes', '10', stdout=out)
        self.assertIn('exp', decode_token(out.getvalue().strip(), SECRET))
