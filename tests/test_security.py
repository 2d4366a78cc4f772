"""Unit tests for intake.core.security: bcrypt hashing and JWT round trip."""

import unittest

import jwt

from intake.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("testpassword123")
        self.assertNotEqual(hashed, "testpassword123")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("testpassword123", hashed))

    def test_wrong_password(self) -> None:
        hashed = hash_password("testpassword123")
        self.assertFalse(verify_password("wrongpassword", hashed))

    def test_same_password_different_hashes(self) -> None:
        self.assertNotEqual(hash_password("samepass"), hash_password("samepass"))

    def test_malformed_hash_is_false(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))

    def test_long_password_hashes_first_72_bytes(self) -> None:
        # 128 chars is the signup maximum.
        long_password = "x" * 128
        hashed = hash_password(long_password)
        self.assertTrue(verify_password(long_password, hashed))
        self.assertTrue(verify_password("x" * 72, hashed))


class TestAccessToken(unittest.TestCase):
    def test_round_trip(self) -> None:
        token = create_access_token("123-abc", "test@example.com")
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "123-abc")
        self.assertEqual(payload["email"], "test@example.com")
        self.assertIn("exp", payload)

    def test_foreign_signature_rejected(self) -> None:
        forged = jwt.encode({"sub": "123-abc", "email": "x@example.com"}, "other-secret", algorithm="HS256")
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(forged)

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token("invalid-token")


if __name__ == "__main__":
    unittest.main()
