"""Unit tests for request body normalization and validation."""

import unittest

from pydantic import ValidationError

from accounts.schemas.auth import LoginRequest
from accounts.schemas.users import UserWrite


class TestUserWrite(unittest.TestCase):
    def test_normalizes_fields(self) -> None:
        body = UserWrite(username="  ab ", email="  A@B.COM ", password=" longenough1 ")
        self.assertEqual(body.username, "ab")
        self.assertEqual(body.email, "a@b.com")
        self.assertEqual(body.password, "longenough1")

    def test_username_length_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            UserWrite(username="a", email="a@b.com", password="longenough1")
        with self.assertRaises(ValidationError):
            UserWrite(username="x" * 51, email="a@b.com", password="longenough1")
        UserWrite(username="x" * 50, email="a@b.com", password="longenough1")

    def test_email_shape(self) -> None:
        for bad in ("ab.com", "a@b", "a b@c.com", "@b.com", "   "):
            with self.subTest(email=bad), self.assertRaises(ValidationError):
                UserWrite(username="ab", email=bad, password="longenough1")

    def test_long_password_accepted(self) -> None:
        body = UserWrite(username="ab", email="a@b.com", password="p" * 129)
        self.assertEqual(len(body.password), 129)

    def test_password_min_length_after_trim(self) -> None:
        with self.assertRaises(ValidationError):
            UserWrite(username="ab", email="a@b.com", password="  short7  ")

    def test_non_string_fields_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            UserWrite(username=12, email="a@b.com", password="longenough1")
        with self.assertRaises(ValidationError):
            UserWrite(username="ab", email="a@b.com", password=12345678)

    def test_all_fields_required(self) -> None:
        with self.assertRaises(ValidationError):
            UserWrite(username="ab", email="a@b.com")


class TestLoginRequest(unittest.TestCase):
    def test_normalizes_email_and_password(self) -> None:
        body = LoginRequest(email=" User@Example.COM ", password=" secret123 ")
        self.assertEqual(body.email, "user@example.com")
        self.assertEqual(body.password, "secret123")

    def test_empty_after_trim_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            LoginRequest(email="   ", password="secret123")
        with self.assertRaises(ValidationError):
            LoginRequest(email="a@b.com", password="   ")

    def test_non_string_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            LoginRequest(email=None, password="secret123")


if __name__ == "__main__":
    unittest.main()
