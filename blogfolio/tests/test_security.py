import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from blogfolio.errors import UnauthorizedError
from blogfolio.security import TokenService, hash_password, verify_password


class PasswordHashingTests(unittest.TestCase):
    def test_hash_is_salted_and_verifies(self):
        first = hash_password("secret123")
        second = hash_password("secret123")
        self.assertNotEqual(first, second)
        self.assertNotIn("secret123", first)
        self.assertTrue(verify_password("secret123", first))
        self.assertFalse(verify_password("wrong-password", first))

    def test_malformed_hash_does_not_verify(self):
        self.assertFalse(verify_password("secret123", "not-a-bcrypt-hash"))


class TokenServiceTests(unittest.TestCase):
    def setUp(self):
        self.tokens = TokenService(secret="unit-secret")

    def test_issue_and_verify_roundtrip(self):
        token = self.tokens.issue("user-1")
        self.assertEqual(self.tokens.verify(token), "user-1")

    def test_token_expires_after_seven_days(self):
        issued = datetime.now(timezone.utc) - timedelta(days=7, minutes=1)
        token = self.tokens.issue("user-1", now=issued)
        with self.assertRaises(UnauthorizedError):
            self.tokens.verify(token)

    def test_expiry_claim_is_seven_days_out(self):
        issued = datetime(2030, 1, 1, tzinfo=timezone.utc)
        token = self.tokens.issue("user-1", now=issued)
        claims = jwt.get_unverified_claims(token)
        self.assertEqual(claims["exp"] - claims["iat"], 7 * 24 * 3600)

    def test_wrong_secret_rejected(self):
        token = TokenService(secret="other-secret").issue("user-1")
        with self.assertRaises(UnauthorizedError):
            self.tokens.verify(token)

    def test_token_without_subject_rejected(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "unit-secret",
            algorithm="HS256",
        )
        with self.assertRaises(UnauthorizedError):
            self.tokens.verify(token)

    def test_garbage_rejected(self):
        with self.assertRaises(UnauthorizedError):
            self.tokens.verify("not.a.token")


if __name__ == "__main__":
    unittest.main()
