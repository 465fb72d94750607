"""
Shared fixtures for the API tests.
"""

from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from blogfolio.app import create_app
from blogfolio.config import Settings, get_settings
from blogfolio.db import InMemoryDbClient
from blogfolio.dependencies import get_db_client, get_media_client
from blogfolio.media import InMemoryMediaClient
from blogfolio.records import UserRecord
from blogfolio.security import TokenService, hash_password

TEST_SETTINGS = Settings(
    jwt_secret="test-secret",
    admin_key="test-admin-key",
    use_in_memory_backends=True,
)

ADMIN_PASSWORD = "secret123"
# Hashed once; bcrypt is deliberately slow.
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.media = InMemoryMediaClient()
        self.app = create_app()
        self.app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
        self.app.dependency_overrides[get_db_client] = lambda: self.db
        self.app.dependency_overrides[get_media_client] = lambda: self.media
        self.client = TestClient(self.app)
        self.tokens = TokenService.from_settings(TEST_SETTINGS)

    def make_user(
        self, email: str = "admin@example.com", role: str = "admin", name: str = "Admin"
    ) -> UserRecord:
        return self.db.create_user(
            UserRecord(
                name=name,
                email=email,
                password_hash=ADMIN_PASSWORD_HASH,
                role=role,
            )
        )

    def auth_headers(self, user: UserRecord) -> dict:
        return {"Authorization": f"Bearer {self.tokens.issue(user.id)}"}
