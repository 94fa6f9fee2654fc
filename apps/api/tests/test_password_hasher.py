"""Credential hasher tests."""

from __future__ import annotations

import unittest

from app.adapters.auth.passwords import Argon2PasswordHasher


def _cheap_hasher(**overrides: int) -> Argon2PasswordHasher:
    params = {"time_cost": 1, "memory_cost": 8, "parallelism": 1}
    params.update(overrides)
    return Argon2PasswordHasher(**params)


class Argon2PasswordHasherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = _cheap_hasher()

    def test_verify_accepts_own_verifier(self) -> None:
        for secret in ["secret1", "", "correct horse battery staple", "pässwörd-ü", "x" * 512]:
            with self.subTest(secret=secret):
                self.assertTrue(self.hasher.verify(secret, self.hasher.hash(secret)))

    def test_verify_rejects_other_secret(self) -> None:
        verifier = self.hasher.hash("secret1")

        self.assertFalse(self.hasher.verify("secret2", verifier))
        self.assertFalse(self.hasher.verify("Secret1", verifier))
        self.assertFalse(self.hasher.verify("", verifier))

    def test_verifier_is_salted_and_does_not_contain_secret(self) -> None:
        first = self.hasher.hash("secret1")
        second = self.hasher.hash("secret1")

        self.assertNotEqual(first, second)
        self.assertNotIn("secret1", first)
        self.assertTrue(first.startswith("$argon2id$"))
        self.assertTrue(self.hasher.verify("secret1", second))

    def test_unparseable_verifier_fails_without_raising(self) -> None:
        verifiers = [
            "",
            "not-a-hash",
            "5f4dcc3b5aa765d6",
            "$argon2id$v=19$garbage",
            "pässwort",
            "$argon2id$v=19$m=8,t=1,p=1$sälz$häsh",
        ]
        for verifier in verifiers:
            with self.subTest(verifier=verifier):
                self.assertFalse(self.hasher.verify("secret1", verifier))

    def test_needs_rehash_flags_weaker_or_unparseable_verifiers(self) -> None:
        stronger = _cheap_hasher(time_cost=2)
        weak_verifier = self.hasher.hash("secret1")

        self.assertTrue(stronger.needs_rehash(weak_verifier))
        self.assertFalse(self.hasher.needs_rehash(weak_verifier))
        self.assertTrue(self.hasher.needs_rehash("5f4dcc3b5aa765d6"))
        self.assertTrue(self.hasher.needs_rehash("pässwort"))

    def test_dummy_verification_never_raises(self) -> None:
        self.assertIsNone(self.hasher.verify_dummy("anything"))


if __name__ == "__main__":
    unittest.main()
