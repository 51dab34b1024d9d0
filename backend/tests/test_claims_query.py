import unittest
from datetime import datetime, timedelta, timezone

from fixtures import add_deal, add_user, make_context

from perks.models.claim import Claim, ClaimStatus
from perks.models.deal import AccessLevel
from perks.services import claims_engine


class TestListClaims(unittest.TestCase):
    def setUp(self):
        self.ctx = make_context()
        self.db = self.ctx.session_factory()
        self.addCleanup(self.ctx.close)
        self.addCleanup(self.db.close)
        self.user = add_user(self.db, "lister@example.com", is_verified=True)

    def _claim(self, deal, status: ClaimStatus, claimed_at: datetime, user=None) -> Claim:
        claim = Claim(user_id=(user or self.user).id, deal_id=deal.id, status=status, claimed_at=claimed_at)
        self.db.add(claim)
        self.db.commit()
        return claim

    def test_empty_list(self):
        out = claims_engine.list_claims(self.db, self.user.id)
        self.assertEqual(out["claims"], [])
        self.assertEqual(out["stats"], {"total": 0, "pending": 0, "approved": 0, "rejected": 0})

    def test_orders_most_recent_first_and_tallies_statuses(self):
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        aws = add_deal(self.db, "aws-cloud-credits", partner_url="https://aws.amazon.com", eligibility="All")
        gcp = add_deal(self.db, "gcp-credits", access_level=AccessLevel.LOCKED)
        notion = add_deal(self.db, "notion-pro", is_active=False)
        figma = add_deal(self.db, "figma-pro-discount")

        self._claim(aws, ClaimStatus.PENDING, base)
        self._claim(gcp, ClaimStatus.APPROVED, base + timedelta(days=2))
        self._claim(notion, ClaimStatus.REJECTED, base + timedelta(days=1))
        self._claim(figma, ClaimStatus.PENDING, base + timedelta(days=3))

        out = claims_engine.list_claims(self.db, self.user.id)
        slugs = [c["deal"]["slug"] for c in out["claims"]]
        self.assertEqual(slugs, ["figma-pro-discount", "gcp-credits", "notion-pro", "aws-cloud-credits"])

        stats = out["stats"]
        self.assertEqual(stats, {"total": 4, "pending": 2, "approved": 1, "rejected": 1})
        self.assertEqual(stats["total"], stats["pending"] + stats["approved"] + stats["rejected"])

        aws_view = out["claims"][-1]["deal"]
        self.assertEqual(aws_view["partnerUrl"], "https://aws.amazon.com")
        self.assertEqual(aws_view["eligibility"], "All")
        self.assertTrue(aws_view["isActive"])
        self.assertFalse(out["claims"][2]["deal"]["isActive"])

    def test_only_returns_own_claims(self):
        other = add_user(self.db, "other@example.com")
        deal = add_deal(self.db, "vercel-pro-startup")
        now = datetime.now(timezone.utc)
        self._claim(deal, ClaimStatus.PENDING, now)
        self._claim(deal, ClaimStatus.APPROVED, now, user=other)

        mine = claims_engine.list_claims(self.db, self.user.id)
        theirs = claims_engine.list_claims(self.db, other.id)
        self.assertEqual(mine["stats"]["total"], 1)
        self.assertEqual(mine["claims"][0]["status"], "pending")
        self.assertEqual(theirs["stats"], {"total": 1, "pending": 0, "approved": 1, "rejected": 0})

    def test_submitted_claims_show_up(self):
        add_deal(self.db, "mongodb-atlas")
        add_deal(self.db, "azure-startup-credits", access_level=AccessLevel.LOCKED)
        claims_engine.submit_claim(self.db, self.user.id, "mongodb-atlas")
        claims_engine.submit_claim(self.db, self.user.id, "azure-startup-credits")

        out = claims_engine.list_claims(self.db, self.user.id)
        self.assertEqual(out["stats"]["total"], 2)
        self.assertEqual(out["stats"]["pending"], 2)
        self.assertEqual({c["deal"]["slug"] for c in out["claims"]}, {"mongodb-atlas", "azure-startup-credits"})


class TestClaimStats(unittest.TestCase):
    def test_partitions_by_status(self):
        claims = [{"status": "pending"}, {"status": "rejected"}, {"status": "rejected"}]
        self.assertEqual(
            claims_engine.claim_stats(claims),
            {"total": 3, "pending": 1, "approved": 0, "rejected": 2},
        )


if __name__ == "__main__":
    unittest.main()
