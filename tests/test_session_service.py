import gc
import threading
import unittest

from mindjournal.services import session_service
from mindjournal.services.chat_service import save_message
from mindjournal.utils.errors import NotFoundError, PersistenceError, ValidationError
from tests.fake_firestore import FakeFirestore


class SessionServiceTests(unittest.TestCase):
    def setUp(self):
        self.db = FakeFirestore()

    def _add_messages(self, session_id, count):
        for i in range(count):
            save_message(self.db, "u1", session_id, {"role": "user", "text": f"message {i}"})

    def test_first_load_creates_session_1(self):
        sessions, active = session_service.load_sessions(self.db, "u1")
        self.assertEqual(len(sessions), 1)
        self.assertEqual(active.name, "Session 1")
        self.assertEqual(active.id, sessions[0].id)

    def test_load_selects_most_recent_and_does_not_create(self):
        session_service.create_session(self.db, "u1")
        second = session_service.create_session(self.db, "u1")
        sessions, active = session_service.load_sessions(self.db, "u1")
        self.assertEqual(len(sessions), 2)
        self.assertEqual(active.id, second.id)

    def test_sessions_listed_oldest_first_with_sequential_names(self):
        for _ in range(3):
            session_service.create_session(self.db, "u1")
        names = [s.name for s in session_service.list_sessions(self.db, "u1")]
        self.assertEqual(names, ["Session 1", "Session 2", "Session 3"])

    def test_name_skips_taken_numbers_after_delete(self):
        first = session_service.create_session(self.db, "u1")
        session_service.create_session(self.db, "u1")
        session_service.create_session(self.db, "u1")
        session_service.delete_session(self.db, "u1", first.id)

        created = session_service.create_session(self.db, "u1")
        self.assertEqual(created.name, "Session 4")

    def test_new_session_has_blank_questionnaires(self):
        session = session_service.create_session(self.db, "u1")
        base = f"users/u1/sessions/{session.id}/questions"
        for name, count in (("PHQ-9", 9), ("GAD-7", 7), ("PCL-5", 20)):
            questions = self.db.docs[f"{base}/{name}"]["questions"]
            self.assertEqual(len(questions), count)
            self.assertTrue(all(q["score"] is None for q in questions.values()))

    def test_concurrent_first_loads_create_one_session(self):
        self.db.read_delay = 0.05
        barrier = threading.Barrier(2)
        errors = []

        def load():
            try:
                barrier.wait()
                session_service.load_sessions(self.db, "u1")
            except Exception as e:  # surfaced below
                errors.append(e)

        threads = [threading.Thread(target=load) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        self.db.read_delay = 0
        sessions = session_service.list_sessions(self.db, "u1")
        self.assertEqual([s.name for s in sessions], ["Session 1"])

    def test_creation_guard_released_after_use(self):
        for uid in ("u1", "u2", "u3"):
            session_service.load_sessions(self.db, uid)
            session_service.create_session(self.db, uid)
        gc.collect()
        for uid in ("u1", "u2", "u3"):
            self.assertNotIn(uid, session_service._creation_locks)

    def test_rename_bounds(self):
        session = session_service.create_session(self.db, "u1")
        with self.assertRaises(ValidationError):
            session_service.rename_session(self.db, "u1", session.id, "")
        with self.assertRaises(ValidationError):
            session_service.rename_session(self.db, "u1", session.id, "x" * 51)

        renamed = session_service.rename_session(self.db, "u1", session.id, "y" * 50)
        self.assertEqual(renamed.name, "y" * 50)
        self.assertEqual(session_service.list_sessions(self.db, "u1")[0].name, "y" * 50)

    def test_rename_missing_session(self):
        with self.assertRaises(NotFoundError):
            session_service.rename_session(self.db, "u1", "nope", "Evening")

    def test_delete_cascades_messages_and_questionnaires(self):
        keep = session_service.create_session(self.db, "u1")
        doomed = session_service.create_session(self.db, "u1")
        self._add_messages(doomed.id, 3)
        self._add_messages(keep.id, 1)

        session_service.delete_session(self.db, "u1", doomed.id)

        self.assertEqual(session_service.list_messages(self.db, "u1", doomed.id), [])
        self.assertFalse(any(p.startswith(f"users/u1/sessions/{doomed.id}") for p in self.db.docs))
        self.assertEqual(len(session_service.list_messages(self.db, "u1", keep.id)), 1)

    def test_delete_uses_single_batch_for_small_sessions(self):
        session_service.create_session(self.db, "u1")
        doomed = session_service.create_session(self.db, "u1")
        self._add_messages(doomed.id, 5)
        before = self.db.batches_committed
        session_service.delete_session(self.db, "u1", doomed.id)
        self.assertEqual(self.db.batches_committed - before, 1)

    def test_delete_last_session_rejected(self):
        only = session_service.create_session(self.db, "u1")
        with self.assertRaises(ValidationError):
            session_service.delete_session(self.db, "u1", only.id)

    def test_delete_unknown_session(self):
        session_service.create_session(self.db, "u1")
        with self.assertRaises(NotFoundError):
            session_service.delete_session(self.db, "u1", "missing")

    def test_delete_all(self):
        for _ in range(3):
            session = session_service.create_session(self.db, "u1")
            self._add_messages(session.id, 2)
        self.assertEqual(session_service.delete_all_sessions(self.db, "u1"), 3)
        self.assertEqual(self.db.docs, {})

    def test_messages_ordered_by_timestamp(self):
        session = session_service.create_session(self.db, "u1")
        self._add_messages(session.id, 4)
        messages = session_service.list_messages(self.db, "u1", session.id)
        self.assertEqual([m.text for m in messages], [f"message {i}" for i in range(4)])
        stamps = [m.timestamp for m in messages]
        self.assertEqual(stamps, sorted(set(stamps)))

    def test_backend_failure(self):
        self.db.fail_reads = True
        with self.assertRaises(PersistenceError):
            session_service.load_sessions(self.db, "u1")


if __name__ == "__main__":
    unittest.main()
