"""Session token issue/verify tests."""

from __future__ import annotations

import json
import unittest
from datetime import UTC, datetime, timedelta

import jwt
from jwt.utils import base64url_encode

from app.adapters.auth.base import AuthVerificationError
from app.adapters.auth.tokens import JwtTokenCodec
from app.schemas.auth import AuthPrincipal

_SECRET = "unit-test-signing-secret-0123456789abcdef"


class _FixedClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _segment(data: dict) -> str:
    return base64url_encode(json.dumps(data).encode("utf-8")).decode("ascii")


class JwtTokenCodecTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FixedClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC))
        self.codec = JwtTokenCodec(secret=_SECRET, ttl=timedelta(hours=24), clock=self.clock)

    def test_round_trip_returns_embedded_principal(self) -> None:
        for principal_id, name in [(1, "alice"), (42, "bob"), (987654, "Zoë Ünïcode"), (7, "with space")]:
            issued = self.codec.issue(principal_id, name)
            self.assertEqual(
                self.codec.verify(issued.token),
                AuthPrincipal(id=principal_id, display_name=name),
            )
            self.assertEqual(issued.principal, AuthPrincipal(id=principal_id, display_name=name))

    def test_expiry_is_issue_time_plus_ttl(self) -> None:
        issued = self.codec.issue(5, "alice", ttl=timedelta(minutes=30))

        self.assertEqual(issued.expires_at, datetime(2026, 1, 1, 12, 30, 0, tzinfo=UTC))
        claims = jwt.decode(issued.token, _SECRET, algorithms=["HS256"], options={"verify_exp": False})
        self.assertEqual(claims["exp"], int(issued.expires_at.timestamp()))
        self.assertEqual(claims["sub"], "5")
        self.assertEqual(claims["name"], "alice")

    def test_default_ttl_comes_from_constructor(self) -> None:
        issued = self.codec.issue(5, "alice")
        self.assertEqual(issued.expires_at - self.clock.now, timedelta(hours=24))

    def test_zero_ttl_token_is_rejected_immediately(self) -> None:
        issued = self.codec.issue(5, "alice", ttl=timedelta(0))
        self.assertIsNone(self.codec.verify(issued.token))

    def test_token_is_valid_until_expiry_then_rejected(self) -> None:
        issued = self.codec.issue(5, "alice", ttl=timedelta(seconds=60))

        self.clock.now += timedelta(seconds=59)
        self.assertIsNotNone(self.codec.verify(issued.token))

        self.clock.now += timedelta(seconds=1)
        self.assertIsNone(self.codec.verify(issued.token))

        self.clock.now += timedelta(days=1)
        self.assertIsNone(self.codec.verify(issued.token))

    def test_every_single_character_flip_is_rejected(self) -> None:
        token = self.codec.issue(5, "alice").token

        for index, char in enumerate(token):
            replacement = "A" if char != "A" else "B"
            tampered = token[:index] + replacement + token[index + 1 :]
            with self.subTest(index=index):
                self.assertIsNone(self.codec.verify(tampered))

    def test_token_signed_with_another_secret_is_rejected(self) -> None:
        other = JwtTokenCodec(secret="another-signing-secret-0123456789abcdef", ttl=timedelta(hours=1), clock=self.clock)
        self.assertIsNone(self.codec.verify(other.issue(5, "alice").token))

    def test_forged_unsigned_tokens_are_rejected(self) -> None:
        payload = _segment({"sub": "1", "name": "admin", "exp": 4102444800})
        forged_none = f"{_segment({'alg': 'none', 'typ': 'JWT'})}.{payload}."
        forged_empty_sig = f"{_segment({'alg': 'HS256', 'typ': 'JWT'})}.{payload}."

        self.assertIsNone(self.codec.verify(forged_none))
        self.assertIsNone(self.codec.verify(forged_empty_sig))

    def test_malformed_tokens_are_rejected_without_raising(self) -> None:
        # Includes an unsigned dotted-decimal token.
        legacy = "".join(f"{ord(c)}." for c in '{"exp":4102444800,"user_id":1,"username":"alice"}')
        for token in ["", "abc", "a.b", "a.b.c.d", "..", "....", "!!.!!.!!", legacy, None, 12345]:
            with self.subTest(token=token):
                self.assertIsNone(self.codec.verify(token))  # type: ignore[arg-type]

    def test_tokens_with_missing_or_mistyped_claims_are_rejected(self) -> None:
        exp = int((self.clock.now + timedelta(hours=1)).timestamp())
        cases = [
            {"sub": "5", "exp": exp},
            {"name": "alice", "exp": exp},
            {"sub": "5", "name": "alice"},
            {"sub": "not-a-number", "name": "alice", "exp": exp},
            {"sub": "5", "name": 17, "exp": exp},
            {"sub": "5", "name": "alice", "exp": "tomorrow"},
        ]
        for claims in cases:
            token = jwt.encode(claims, _SECRET, algorithm="HS256")
            with self.subTest(claims=claims):
                self.assertIsNone(self.codec.verify(token))

    def test_decode_reports_rejection_reason(self) -> None:
        expired = self.codec.issue(5, "alice", ttl=timedelta(0)).token
        with self.assertRaises(AuthVerificationError) as context:
            self.codec.decode(expired)
        self.assertEqual(context.exception.reason, "token_expired")

        with self.assertRaises(AuthVerificationError) as context:
            self.codec.decode("a.b")
        self.assertEqual(context.exception.reason, "token_malformed")

        other = JwtTokenCodec(secret="another-signing-secret-0123456789abcdef", ttl=timedelta(hours=1), clock=self.clock)
        with self.assertRaises(AuthVerificationError) as context:
            self.codec.decode(other.issue(5, "alice").token)
        self.assertEqual(context.exception.reason, "token_invalid")

    def test_blank_secret_is_refused_at_construction(self) -> None:
        with self.assertRaises(ValueError):
            JwtTokenCodec(secret="", ttl=timedelta(hours=1))


if __name__ == "__main__":
    unittest.main()
