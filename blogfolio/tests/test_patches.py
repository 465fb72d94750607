import unittest

from blogfolio.patches import (
    POST_PATCH_POLICY,
    PROFILE_PATCH_POLICY,
    PROJECT_PATCH_POLICY,
    select_changes,
)


class SelectChangesTests(unittest.TestCase):
    def test_truthy_fields_ignore_empty_values(self):
        changes = select_changes(
            {"title": "", "content": None, "category": "Tech"}, POST_PATCH_POLICY
        )
        self.assertEqual(changes, {"category": "Tech"})

    def test_defined_fields_accept_empty_and_null(self):
        changes = select_changes(
            {"excerpt": "", "featured_image": None}, POST_PATCH_POLICY
        )
        self.assertEqual(changes, {"excerpt": "", "featured_image": None})

    def test_empty_list_clears_truthy_list_field(self):
        changes = select_changes({"tags": []}, POST_PATCH_POLICY)
        self.assertEqual(changes, {"tags": []})

    def test_featured_false_is_applied(self):
        changes = select_changes(
            {"featured": False, "live_url": ""}, PROJECT_PATCH_POLICY
        )
        self.assertEqual(changes, {"featured": False, "live_url": ""})

    def test_unknown_fields_dropped(self):
        changes = select_changes(
            {"views": 100, "slug": "x", "role": "editor"}, POST_PATCH_POLICY
        )
        self.assertEqual(changes, {})

    def test_profile_policy(self):
        changes = select_changes(
            {"name": "", "bio": "", "email": "x@example.com"}, PROFILE_PATCH_POLICY
        )
        self.assertEqual(changes, {"bio": ""})


if __name__ == "__main__":
    unittest.main()
