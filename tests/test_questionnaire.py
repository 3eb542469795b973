import unittest

from mindjournal.models.questionnaire import (
    QUESTIONNAIRE_ORDER,
    AssessmentKind,
    build_questionnaire_items,
    get_bank,
)
from mindjournal.services import session_service
from mindjournal.services.questionnaire_service import (
    list_questionnaires,
    merge_diagnostic_scores,
    questionnaire_snapshot,
)
from tests.fake_firestore import FakeFirestore


class QuestionBankTests(unittest.TestCase):
    def test_items_keyed_by_position_and_assessment(self):
        items = build_questionnaire_items()
        self.assertEqual(list(items), ["PHQ-9", "GAD-7", "PCL-5"])
        self.assertEqual(list(items["PHQ-9"])[:2], ["Q1_PHQ9", "Q2_PHQ9"])
        self.assertEqual(items["PCL-5"]["Q20_PCL5"]["id"], 20)
        self.assertIsNone(items["GAD-7"]["Q7_GAD7"]["score"])

    def test_get_bank(self):
        self.assertEqual(get_bank("GAD-7").kind, AssessmentKind.gad7)
        self.assertEqual(get_bank("PCL-5").max_score, 4)
        self.assertIsNone(get_bank("BDI-II"))


class ScoreMergeTests(unittest.TestCase):
    def setUp(self):
        self.db = FakeFirestore()
        session = session_service.create_session(self.db, "u1")
        self.ref = session_service.session_ref(self.db, "u1", session.id)

    def _scores(self, assessment):
        return {k: q.score for k, q in
                next(q for q in list_questionnaires(self.ref) if q.assessment.value == assessment).questions.items()}

    def test_valid_scores_written(self):
        written = merge_diagnostic_scores(self.ref, {
            "PHQ-9": {"Q1_PHQ9": 1, "Q9_PHQ9": 3},
            "PCL-5": {"Q4_PCL5": "4"},
        })
        self.assertEqual(written, 3)
        self.assertEqual(self._scores("PHQ-9")["Q1_PHQ9"], 1)
        self.assertEqual(self._scores("PHQ-9")["Q9_PHQ9"], 3)
        self.assertEqual(self._scores("PCL-5")["Q4_PCL5"], 4)

    def test_invalid_entries_skipped(self):
        written = merge_diagnostic_scores(self.ref, {
            "BDI-II": {"Q1_BDI": 2},           # unknown assessment
            "GAD-7": {
                "Q8_GAD7": 1,                  # no such question
                "Q1_GAD7": 4,                  # out of range for GAD-7
                "Q2_GAD7": True,               # not a score
                "Q3_GAD7": "n/a",
                "Q4_GAD7": 2,
            },
        })
        self.assertEqual(written, 1)
        scores = self._scores("GAD-7")
        self.assertEqual(scores["Q4_GAD7"], 2)
        self.assertIsNone(scores["Q1_GAD7"])
        self.assertIsNone(scores["Q2_GAD7"])

    def test_empty_mapping(self):
        self.assertEqual(merge_diagnostic_scores(self.ref, None), 0)
        self.assertEqual(merge_diagnostic_scores(self.ref, {}), 0)

    def test_snapshot_in_assessment_order(self):
        merge_diagnostic_scores(self.ref, {"GAD-7": {"Q1_GAD7": 2}})
        snapshot = questionnaire_snapshot(self.ref)
        self.assertEqual(list(snapshot), [k.value for k in QUESTIONNAIRE_ORDER])
        self.assertEqual(snapshot["GAD-7"]["Q1_GAD7"]["score"], 2)
        self.assertEqual(len(snapshot["PCL-5"]), 20)


if __name__ == "__main__":
    unittest.main()
