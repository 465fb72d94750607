import threading
import unittest

from blogfolio.db import InMemoryDbClient
from blogfolio.query import POST_LISTING, ListingParams, build_query
from blogfolio.records import PostRecord, UserRecord


class InMemoryDbClientTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()

    def test_reads_tolerate_concurrent_inserts(self):
        """Route handlers share one client across threadpool workers."""
        errors = []
        done = threading.Event()

        def write():
            try:
                for i in range(2000):
                    self.db.create_post(
                        PostRecord(
                            title=f"post {i}",
                            slug=f"post-{i}",
                            content="body",
                            category="Tech",
                            author_id="u",
                            status="published",
                        )
                    )
                    self.db.users[f"u{i}"] = UserRecord(
                        name="n", email=f"u{i}@example.com", password_hash="x"
                    )
            finally:
                done.set()

        writer = threading.Thread(target=write)
        writer.start()
        query = build_query(ListingParams(search="post"), POST_LISTING)
        try:
            while not done.is_set():
                self.db.list_posts(query)
                self.db.get_user_by_email("nobody@example.com")
                self.db.get_post_by_slug("missing")
        except RuntimeError as exc:
            errors.append(exc)
        writer.join()

        self.assertEqual(errors, [])
        _, total = self.db.list_posts(query)
        self.assertEqual(total, 2000)


if __name__ == "__main__":
    unittest.main()
