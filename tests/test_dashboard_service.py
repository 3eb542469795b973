import unittest

from google.cloud import firestore

from mindjournal.services import session_service
from mindjournal.services.dashboard_service import dashboard_summary
from mindjournal.services.journal_service import create_journal_entry
from tests.fake_firestore import FakeFirestore


class DashboardTests(unittest.TestCase):
    def setUp(self):
        self.db = FakeFirestore()

    def test_empty_user(self):
        summary = dashboard_summary(self.db, "u1")
        self.assertEqual(summary["total_entries"], 0)
        self.assertEqual(summary["total_sessions"], 0)
        self.assertEqual(summary["mood_data"], [
            {"mood": m, "count": 0} for m in ("Happy", "Calm", "Neutral", "Sad", "Anxious")
        ])
        self.assertEqual(summary["recent_entries"], [])

    def test_counts_and_histogram(self):
        for mood in ("Happy", "Sad", "Sad", "Anxious", "Sad", "Calm", "Happy"):
            create_journal_entry(self.db, "u1", f"felt {mood}", mood)
        session_service.create_session(self.db, "u1")
        session_service.create_session(self.db, "u1")
        create_journal_entry(self.db, "u2", "someone else", "Happy")

        summary = dashboard_summary(self.db, "u1")
        self.assertEqual(summary["total_entries"], 7)
        self.assertEqual(summary["total_sessions"], 2)
        counts = {row["mood"]: row["count"] for row in summary["mood_data"]}
        self.assertEqual(counts, {"Happy": 2, "Calm": 1, "Neutral": 0, "Sad": 3, "Anxious": 1})
        self.assertEqual(len(summary["recent_entries"]), 5)
        self.assertEqual(summary["recent_entries"][0].content, "felt Happy")

    def test_unknown_mood_counted_but_left_out_of_histogram(self):
        create_journal_entry(self.db, "u1", "fine", "Happy")
        self.db.document("users/u1/journalEntries/legacy").set({
            "createdAt": firestore.SERVER_TIMESTAMP,
            "mood": "Angry",
            "content": "From the web client",
        })

        summary = dashboard_summary(self.db, "u1")
        self.assertEqual(summary["total_entries"], 2)
        self.assertEqual(sum(row["count"] for row in summary["mood_data"]), 1)
        self.assertNotIn("Angry", [row["mood"] for row in summary["mood_data"]])

    def test_read_only(self):
        create_journal_entry(self.db, "u1", "hello", "Calm")
        before = dict(self.db.docs)
        dashboard_summary(self.db, "u1")
        self.assertEqual(self.db.docs, before)


if __name__ == "__main__":
    unittest.main()
