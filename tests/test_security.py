"""Unit tests for accounts.core.security: bcrypt hashing and JWT encode/decode."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from accounts.core.errors import ConfigurationError
from accounts.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from tests.api_support import TEST_SECRET, make_settings


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password round trip with a low bcrypt cost."""

    def test_same_plaintext_verifies(self) -> None:
        hashed = hash_password("longenough1", rounds=4)
        self.assertNotEqual(hashed, "longenough1")
        self.assertTrue(verify_password("longenough1", hashed))

    def test_different_plaintext_fails(self) -> None:
        hashed = hash_password("longenough1", rounds=4)
        self.assertFalse(verify_password("longenough2", hashed))

    def test_hashes_are_salted(self) -> None:
        self.assertNotEqual(
            hash_password("longenough1", rounds=4),
            hash_password("longenough1", rounds=4),
        )

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("longenough1", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """create_access_token / decode_access_token with the configured secret."""

    def setUp(self) -> None:
        self.settings = make_settings()

    def test_claims_round_trip(self) -> None:
        token = create_access_token(sub=7, role="user", settings=self.settings)
        payload = decode_access_token(token, self.settings)
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["role"], "user")
        self.assertIn("exp", payload)

    def test_default_expiry_is_twelve_hours(self) -> None:
        token = create_access_token(sub=1, role="admin", settings=self.settings)
        payload = decode_access_token(token, self.settings)
        self.assertEqual(payload["exp"] - payload["iat"], 12 * 60 * 60)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode({"sub": "1", "role": "user", "exp": past}, TEST_SECRET, algorithm="HS256")
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, self.settings)

    def test_wrong_secret_rejected(self) -> None:
        other = make_settings(JWT_SECRET="a-completely-different-secret-value")
        token = create_access_token(sub=1, role="user", settings=other)
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token, self.settings)

    def test_missing_exp_rejected(self) -> None:
        token = jwt.encode({"sub": "1", "role": "user"}, TEST_SECRET, algorithm="HS256")
        with self.assertRaises(jwt.MissingRequiredClaimError):
            decode_access_token(token, self.settings)

    def test_unset_secret_refuses_to_sign_or_verify(self) -> None:
        settings = make_settings(JWT_SECRET=None)
        with self.assertRaises(ConfigurationError):
            create_access_token(sub=1, role="user", settings=settings)
        with self.assertRaises(ConfigurationError):
            decode_access_token("anything", settings)


if __name__ == "__main__":
    unittest.main()
