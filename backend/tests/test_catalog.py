import unittest

from fixtures import add_deal, make_context

from perks.core.errors import DealNotFound, InvalidAccessLevel
from perks.models.deal import AccessLevel
from perks.services import catalog


class TestClamping(unittest.TestCase):
    def test_limit(self):
        self.assertEqual(catalog.clamp_limit(None), 50)
        self.assertEqual(catalog.clamp_limit("abc"), 50)
        self.assertEqual(catalog.clamp_limit("0"), 50)
        self.assertEqual(catalog.clamp_limit("10"), 10)
        self.assertEqual(catalog.clamp_limit("500"), 100)
        self.assertEqual(catalog.clamp_limit("-3"), 0)

    def test_skip(self):
        self.assertEqual(catalog.clamp_skip(None), 0)
        self.assertEqual(catalog.clamp_skip("junk"), 0)
        self.assertEqual(catalog.clamp_skip("-7"), 0)
        self.assertEqual(catalog.clamp_skip("12"), 12)

    def test_id_shape(self):
        self.assertTrue(catalog.looks_like_id("0123456789abcdef0123456789abcdef"))
        self.assertFalse(catalog.looks_like_id("aws-cloud-credits"))
        self.assertFalse(catalog.looks_like_id("0123456789ABCDEF0123456789ABCDEF"))
        self.assertFalse(catalog.looks_like_id(""))


class TestListDeals(unittest.TestCase):
    def setUp(self):
        self.ctx = make_context()
        self.db = self.ctx.session_factory()
        self.addCleanup(self.ctx.close)
        self.addCleanup(self.db.close)

        add_deal(self.db, "aws-cloud-credits", category="cloud", partner_name="Amazon Web Services")
        add_deal(self.db, "gcp-credits", category="cloud", access_level=AccessLevel.LOCKED, partner_name="Google Cloud")
        add_deal(self.db, "figma-pro-discount", category="design", description="Collaborative design tool")
        add_deal(self.db, "notion-pro", category="productivity", title="Notion Pro")
        add_deal(self.db, "slack-business", category="productivity", access_level=AccessLevel.LOCKED)
        add_deal(self.db, "heroku-hobby", category="cloud", is_active=False)

    def test_lists_only_active_deals(self):
        out = catalog.list_deals(self.db)
        slugs = {d["slug"] for d in out["deals"]}
        self.assertEqual(len(slugs), 5)
        self.assertNotIn("heroku-hobby", slugs)
        self.assertEqual(out["pagination"], {"total": 5, "limit": 50, "skip": 0, "hasMore": False})

    def test_filters_by_category_and_access_level(self):
        out = catalog.list_deals(self.db, category="cloud", access_level="public")
        self.assertEqual([d["slug"] for d in out["deals"]], ["aws-cloud-credits"])

        locked = catalog.list_deals(self.db, access_level="locked")
        self.assertEqual({d["slug"] for d in locked["deals"]}, {"gcp-credits", "slack-business"})
        self.assertTrue(all(d["accessLevel"] == "locked" for d in locked["deals"]))

    def test_rejects_unknown_access_level(self):
        with self.assertRaises(InvalidAccessLevel) as ctx:
            catalog.list_deals(self.db, access_level="premium")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.code, "INVALID_ACCESS_LEVEL")

    def test_search_matches_title_description_and_partner(self):
        by_partner = catalog.list_deals(self.db, search="amazon")
        self.assertEqual([d["slug"] for d in by_partner["deals"]], ["aws-cloud-credits"])

        by_description = catalog.list_deals(self.db, search="COLLABORATIVE")
        self.assertEqual([d["slug"] for d in by_description["deals"]], ["figma-pro-discount"])

        any_word = catalog.list_deals(self.db, search="notion google")
        self.assertEqual({d["slug"] for d in any_word["deals"]}, {"notion-pro", "gcp-credits"})

        nothing = catalog.list_deals(self.db, search="100%")
        self.assertEqual(nothing["deals"], [])
        self.assertEqual(nothing["pagination"]["total"], 0)

    def test_pagination_invariants(self):
        seen: list[str] = []
        for skip in range(0, 6):
            out = catalog.list_deals(self.db, limit="2", skip=str(skip))
            page = out["pagination"]
            returned = len(out["deals"])
            self.assertLessEqual(page["skip"] + returned, page["total"])
            self.assertEqual(page["hasMore"], page["skip"] + returned < page["total"])
            if skip % 2 == 0:
                seen.extend(d["slug"] for d in out["deals"])
        self.assertEqual(len(seen), 5)
        self.assertEqual(len(set(seen)), 5)

    def test_page_shapes(self):
        first = catalog.list_deals(self.db, limit=2)
        self.assertEqual(len(first["deals"]), 2)
        self.assertTrue(first["pagination"]["hasMore"])

        last = catalog.list_deals(self.db, limit=2, skip=4)
        self.assertEqual(len(last["deals"]), 1)
        self.assertFalse(last["pagination"]["hasMore"])

        zero = catalog.list_deals(self.db, limit=-1)
        self.assertEqual(zero["deals"], [])
        self.assertEqual(zero["pagination"]["limit"], 0)
        self.assertTrue(zero["pagination"]["hasMore"])


class TestGetDeal(unittest.TestCase):
    def setUp(self):
        self.ctx = make_context()
        self.db = self.ctx.session_factory()
        self.addCleanup(self.ctx.close)
        self.addCleanup(self.db.close)

    def test_by_slug_and_by_id(self):
        deal = add_deal(self.db, "mongodb-atlas", partner_name="MongoDB")
        self.assertEqual(catalog.get_deal(self.db, "mongodb-atlas")["deal"]["id"], deal.id)
        self.assertEqual(catalog.get_deal(self.db, deal.id)["deal"]["partnerName"], "MongoDB")

    def test_inactive_is_not_found(self):
        deal = add_deal(self.db, "heroku-hobby", is_active=False)
        with self.assertRaises(DealNotFound):
            catalog.get_deal(self.db, deal.id)
        with self.assertRaises(DealNotFound):
            catalog.get_deal(self.db, "heroku-hobby")


if __name__ == "__main__":
    unittest.main()
