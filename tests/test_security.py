"""Unit tests for app.core.security: bcrypt hashing and verification."""

import unittest

from app.core.security import dummy_password_hash, hash_password, verify_password

ROUNDS = 4


class TestHashPassword(unittest.TestCase):
    def test_hash_is_salted(self) -> None:
        first = hash_password("pw", rounds=ROUNDS)
        second = hash_password("pw", rounds=ROUNDS)
        self.assertNotEqual(first, second)
        self.assertTrue(first.startswith("$2"))

    def test_hash_does_not_contain_plaintext(self) -> None:
        self.assertNotIn("correct horse", hash_password("correct horse", rounds=ROUNDS))

    def test_cost_factor_is_encoded(self) -> None:
        self.assertIn("$04$", hash_password("pw", rounds=ROUNDS))


class TestVerifyPassword(unittest.TestCase):
    def test_matching_password(self) -> None:
        digest = hash_password("s3cret", rounds=ROUNDS)
        self.assertTrue(verify_password("s3cret", digest))

    def test_mismatch_returns_false(self) -> None:
        digest = hash_password("s3cret", rounds=ROUNDS)
        self.assertFalse(verify_password("S3cret", digest))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("s3cret", "not-a-bcrypt-hash"))

    def test_input_beyond_72_bytes_is_ignored(self) -> None:
        base = "x" * 72
        digest = hash_password(base + "tail-one", rounds=ROUNDS)
        self.assertTrue(verify_password(base + "tail-two", digest))

    def test_non_ascii_password(self) -> None:
        digest = hash_password("pässwörd", rounds=ROUNDS)
        self.assertTrue(verify_password("pässwörd", digest))
        self.assertFalse(verify_password("passwort", digest))


class TestDummyPasswordHash(unittest.TestCase):
    def test_cached_per_cost(self) -> None:
        self.assertEqual(dummy_password_hash(ROUNDS), dummy_password_hash(ROUNDS))

    def test_never_matches_empty_password(self) -> None:
        self.assertFalse(verify_password("", dummy_password_hash(ROUNDS)))


if __name__ == "__main__":
    unittest.main()
