"""Unit tests for traintrack.core.security: bcrypt passwords, token digests and JWT helpers."""

import unittest

import jwt

from traintrack.core.security import (
    decode_token,
    encode_token,
    hash_password,
    hash_token,
    token_matches,
    verify_password,
)

SECRET = "test-secret"


class TestPasswordHashing(unittest.TestCase):
    def test_hash_verifies_and_is_salted(self) -> None:
        first = hash_password("s3cret-pass", rounds=4)
        second = hash_password("s3cret-pass", rounds=4)
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("s3cret-pass", first))
        self.assertFalse(verify_password("wrong-pass", first))

    def test_missing_or_corrupt_hash_never_verifies(self) -> None:
        self.assertFalse(verify_password("anything", None))
        self.assertFalse(verify_password("anything", ""))
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestTokenDigest(unittest.TestCase):
    """Stored digests must distinguish tokens that share a long prefix."""

    def test_digest_is_deterministic_hex(self) -> None:
        digest = hash_token("abc")
        self.assertEqual(digest, hash_token("abc"))
        self.assertEqual(len(digest), 64)

    def test_matches_only_same_token(self) -> None:
        prefix = "x" * 100
        digest = hash_token(prefix + "A")
        self.assertTrue(token_matches(prefix + "A", digest))
        self.assertFalse(token_matches(prefix + "B", digest))

    def test_no_digest_never_matches(self) -> None:
        self.assertFalse(token_matches("token", None))
        self.assertFalse(token_matches("token", ""))


class TestJwt(unittest.TestCase):
    def test_round_trip_adds_registered_claims(self) -> None:
        token, expires = encode_token({"id": 7, "role": "user", "session": "s-1"}, SECRET, 15)
        payload = decode_token(token, SECRET)
        self.assertEqual(payload["id"], 7)
        self.assertEqual(payload["session"], "s-1")
        self.assertIn("jti", payload)
        self.assertEqual(payload["exp"], int(expires.timestamp()))

    def test_same_claims_give_distinct_tokens(self) -> None:
        claims = {"id": 1, "role": "user", "session": "s"}
        first, _ = encode_token(claims, SECRET, 15)
        second, _ = encode_token(claims, SECRET, 15)
        self.assertNotEqual(first, second)

    def test_expired_token_rejected(self) -> None:
        token, _ = encode_token({"id": 1}, SECRET, -1)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_token(token, SECRET)

    def test_wrong_secret_rejected(self) -> None:
        token, _ = encode_token({"id": 1}, SECRET, 15)
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_token(token, "other-secret")


if __name__ == "__main__":
    unittest.main()
