"""Unit tests for app.core.security: bcrypt hashing and JWT encode/decode."""

import unittest

import jwt

from app.core.security import (
    BCRYPT_ROUNDS,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """hash_password salts with cost factor 10; verify_password checks against the hash."""

    def test_hash_uses_cost_factor_10(self) -> None:
        self.assertEqual(BCRYPT_ROUNDS, 10)
        hashed = hash_password("Secret1")
        self.assertTrue(hashed.startswith("$2b$10$"))

    def test_hash_is_salted(self) -> None:
        self.assertNotEqual(hash_password("Secret1"), hash_password("Secret1"))

    def test_verify_accepts_correct_password(self) -> None:
        hashed = hash_password("Secret1")
        self.assertTrue(verify_password("Secret1", hashed))

    def test_verify_rejects_wrong_password(self) -> None:
        hashed = hash_password("Secret1")
        self.assertFalse(verify_password("secret1", hashed))

    def test_verify_returns_false_for_malformed_hash(self) -> None:
        self.assertFalse(verify_password("Secret1", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """create_access_token embeds identity and role; decode_access_token validates it."""

    def test_round_trip_claims(self) -> None:
        token = create_access_token(sub=42, role="admin")
        claims = decode_access_token(token)
        self.assertEqual(claims["sub"], "42")
        self.assertEqual(claims["role"], "admin")
        self.assertIn("exp", claims)
        self.assertIn("iat", claims)

    def test_each_token_gets_unique_jti(self) -> None:
        first = decode_access_token(create_access_token(sub=1, role="user"))
        second = decode_access_token(create_access_token(sub=1, role="user"))
        self.assertNotEqual(first["jti"], second["jti"])

    def test_expired_token_rejected(self) -> None:
        token = create_access_token(sub=1, role="user", expires_minutes=-1)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_token_signed_with_other_secret_rejected(self) -> None:
        forged = jwt.encode(
            {"sub": "1", "role": "admin", "jti": "x", "exp": 9999999999},
            "another-secret-that-is-long-enough",
            algorithm="HS256",
        )
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(forged)


if __name__ == "__main__":
    unittest.main()
