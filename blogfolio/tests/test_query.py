import unittest
from datetime import datetime, timedelta, timezone

from blogfolio.query import (
    CONTACT_LISTING,
    POST_LISTING,
    PROJECT_LISTING,
    ListingParams,
    build_query,
    paginate,
    parse_positive_int,
    record_matches,
    sort_records,
)
from blogfolio.records import PostRecord, ProjectRecord


def _project(title, featured, age_days, **kwargs):
    return ProjectRecord(
        title=title,
        description=kwargs.pop("description", "desc"),
        short_description="short",
        category=kwargs.pop("category", "API"),
        featured_image="https://img.test/x.png",
        featured=featured,
        created_at=datetime(2024, 1, 31, tzinfo=timezone.utc) - timedelta(days=age_days),
        **kwargs,
    )


class BuildQueryTests(unittest.TestCase):
    def test_post_defaults_hide_drafts(self):
        query = build_query(ListingParams(), POST_LISTING)
        self.assertEqual(query.filters, {"status": "published"})
        self.assertEqual(query.page, 1)
        self.assertEqual(query.skip, 0)
        self.assertEqual(query.limit, 10)
        self.assertEqual(query.sort, (("created_at", True),))

    def test_post_status_all_removes_status_filter(self):
        query = build_query(ListingParams(status="all"), POST_LISTING)
        self.assertNotIn("status", query.filters)

    def test_post_explicit_status(self):
        query = build_query(ListingParams(status="draft"), POST_LISTING)
        self.assertEqual(query.filters["status"], "draft")

    def test_default_limits_per_entity(self):
        self.assertEqual(build_query(ListingParams(), PROJECT_LISTING).limit, 12)
        self.assertEqual(build_query(ListingParams(), CONTACT_LISTING).limit, 20)

    def test_project_without_status_has_no_filter(self):
        query = build_query(ListingParams(), PROJECT_LISTING)
        self.assertEqual(query.filters, {})

    def test_skip_from_page_and_limit(self):
        query = build_query(ListingParams(page="3", limit="5"), POST_LISTING)
        self.assertEqual(query.page, 3)
        self.assertEqual(query.skip, 10)
        self.assertEqual(query.limit, 5)

    def test_featured_only_for_projects_and_only_true(self):
        self.assertEqual(
            build_query(ListingParams(featured="true"), PROJECT_LISTING).filters,
            {"featured": True},
        )
        self.assertEqual(
            build_query(ListingParams(featured="false"), PROJECT_LISTING).filters, {}
        )
        self.assertNotIn(
            "featured",
            build_query(ListingParams(featured="true"), POST_LISTING).filters,
        )

    def test_category_and_search(self):
        query = build_query(
            ListingParams(category="API", search="Fast  Python"), PROJECT_LISTING
        )
        self.assertEqual(query.filters, {"category": "API"})
        self.assertEqual(query.search_terms, ("fast", "python"))
        self.assertEqual(query.search_fields, ("title", "description", "technologies"))

    def test_parse_positive_int_fallbacks(self):
        self.assertEqual(parse_positive_int(None, 7), 7)
        self.assertEqual(parse_positive_int("abc", 7), 7)
        self.assertEqual(parse_positive_int("0", 7), 7)
        self.assertEqual(parse_positive_int("-2", 7), 7)
        self.assertEqual(parse_positive_int(" 4 ", 7), 4)

    def test_parse_positive_int_reads_leading_digits(self):
        self.assertEqual(parse_positive_int("2abc", 7), 2)
        self.assertEqual(parse_positive_int("1.5", 7), 1)
        self.assertEqual(parse_positive_int("+3", 7), 3)
        self.assertEqual(parse_positive_int("x2", 7), 7)

    def test_search_terms_split_on_punctuation(self):
        query = build_query(ListingParams(search="Hello, world! hello"), POST_LISTING)
        self.assertEqual(query.search_terms, ("hello", "world"))
        query = build_query(ListingParams(search="%"), POST_LISTING)
        self.assertEqual(query.search_terms, ())


class PaginateTests(unittest.TestCase):
    def test_total_pages_rounds_up(self):
        query = build_query(ListingParams(page="2", limit="4"), POST_LISTING)
        page = paginate(["a", "b"], 10, query)
        self.assertEqual(page.current_page, 2)
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(page.total_count, 10)
        self.assertEqual(page.items, ["a", "b"])

    def test_empty_has_zero_pages(self):
        query = build_query(ListingParams(), POST_LISTING)
        page = paginate([], 0, query)
        self.assertEqual(page.total_pages, 0)
        self.assertEqual(page.items, [])


class InMemoryEvaluationTests(unittest.TestCase):
    def test_featured_first_then_newest(self):
        projects = [
            _project("old-plain", False, 10),
            _project("new-featured", True, 1),
            _project("new-plain", False, 0),
            _project("old-featured", True, 20),
        ]
        ordered = sort_records(projects, PROJECT_LISTING.sort)
        self.assertEqual(
            [p.title for p in ordered],
            ["new-featured", "old-featured", "new-plain", "old-plain"],
        )

    def test_search_matches_any_term_case_insensitive(self):
        project = _project("Inventory", False, 0, technologies=["FastAPI", "Redis"])
        query = build_query(ListingParams(search="django redis"), PROJECT_LISTING)
        self.assertTrue(record_matches(project, query))
        query = build_query(ListingParams(search="django"), PROJECT_LISTING)
        self.assertFalse(record_matches(project, query))

    def test_search_matches_whole_words(self):
        project = _project(
            "Hello World", False, 0, technologies=["Node.js"], description="A demo"
        )
        for term in ("or", "wor", "dem", "nod"):
            query = build_query(ListingParams(search=term), PROJECT_LISTING)
            self.assertFalse(record_matches(project, query), term)
        for term in ("WORLD", "demo", "node", "js"):
            query = build_query(ListingParams(search=term), PROJECT_LISTING)
            self.assertTrue(record_matches(project, query), term)

    def test_filters_are_exact(self):
        post = PostRecord(
            title="t", slug="t", content="c", category="Tech", author_id="u"
        )
        query = build_query(ListingParams(status="draft", category="tech"), POST_LISTING)
        self.assertFalse(record_matches(post, query))
        query = build_query(ListingParams(status="draft", category="Tech"), POST_LISTING)
        self.assertTrue(record_matches(post, query))


if __name__ == "__main__":
    unittest.main()
