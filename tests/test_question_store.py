"""Tests for the persistence services: questions, rooms, exams and profiles."""

import pytest
from sqlalchemy import select

from compass.db.session import session_scope
from compass.models.question import QuestionCategory, Subject
from compass.models.user import UserProfile, UserRole
from compass.schemas.exam import ExamCreate, ExamUpdate
from compass.schemas.question import QuestionCreate, QuestionUpdate
from compass.schemas.room import RoomCreate, RoomUpdate
from compass.services.exam_store import ExamStore
from compass.services.question_store import QuestionStore, ScopedQuestionSource, paginate_ids
from compass.services.room_store import RoomStore
from compass.services.user_store import AuthError, ScopedScoreSink, UserStore


def payload(text: str = "Q?", subject: Subject = Subject.CATALOGING, **kwargs) -> QuestionCreate:
    return QuestionCreate(text=text, options=["a", "b", "c", "d"], subject=subject, **kwargs)


class TestPaginateIds:
    def test_first_page(self):
        batch, has_more, next_offset = paginate_ids(list("abcdefg"), 0, 3)
        assert batch == ["a", "b", "c"]
        assert has_more is True
        assert next_offset == 3

    def test_last_page(self):
        batch, has_more, next_offset = paginate_ids(list("abcdefg"), 6, 3)
        assert batch == ["g"]
        assert has_more is False
        assert next_offset == 7

    def test_offset_past_end(self):
        assert paginate_ids(["a"], 5, 3) == ([], False, 1)


class TestQuestionStore:
    def test_filter_by_subject_and_set(self, db, seeded_questions):
        store = QuestionStore(db)

        rows = store.list_questions(subject=Subject.CATALOGING, set_number=1)

        assert len(rows) == 15
        assert {row.subject for row in rows} == {Subject.CATALOGING.value}

    def test_fetch_questions_returns_records(self, db, seeded_questions):
        records = QuestionStore(db).fetch_questions(subject=Subject.INDEXING)
        assert len(records) == 5
        assert all(r.subject == Subject.INDEXING for r in records)
        assert {r.set_number for r in records} == {1, 2, 3}

    def test_create_and_get(self, db):
        store = QuestionStore(db)
        created = store.create(payload(correct_answer=2, set_number=3))

        fetched = store.get(created.id)

        assert fetched is not None
        assert fetched.correct_answer == 2
        assert fetched.set_number == 3
        assert fetched.category == QuestionCategory.STANDARD.value

    def test_get_bulk_preserves_order_and_skips_unknown(self, db, seeded_questions):
        ids = [seeded_questions[3].id, "missing", seeded_questions[0].id]
        rows = QuestionStore(db).get_bulk(ids)
        assert [row.id for row in rows] == [seeded_questions[3].id, seeded_questions[0].id]

    def test_partial_update(self, db):
        store = QuestionStore(db)
        created = store.create(payload(text="Before", set_number=2))

        updated = store.update(created.id, QuestionUpdate(text="After", subject=Subject.INDEXING))

        assert updated.text == "After"
        assert updated.subject == Subject.INDEXING.value
        assert updated.set_number == 2
        assert updated.options == ["a", "b", "c", "d"]

    def test_update_can_clear_set(self, db):
        store = QuestionStore(db)
        created = store.create(payload(set_number=2))

        updated = store.update(created.id, QuestionUpdate(set_number=None))

        assert updated.set_number is None

    def test_update_and_delete_unknown(self, db):
        store = QuestionStore(db)
        assert store.update("missing", QuestionUpdate(text="x")) is None
        assert store.delete("missing") is False

    def test_create_many_is_one_import(self, db):
        store = QuestionStore(db)
        rows = store.create_many([payload(text=f"Q{i}") for i in range(4)])
        assert len(rows) == 4
        assert len(store.list_questions()) == 4
        assert store.import_questions([payload()]) == 1

    def test_delete_category(self, db):
        store = QuestionStore(db)
        store.create(payload(category=QuestionCategory.MOCKBOARD))
        store.create(payload(category=QuestionCategory.MOCKBOARD))
        store.create(payload())

        assert store.delete_category(QuestionCategory.MOCKBOARD) == 2
        assert len(store.list_questions()) == 1


class TestMockboardPool:
    def test_import_keeps_order_across_batches(self, db):
        store = QuestionStore(db)
        store.import_mockboard([payload(text="first"), payload(text="second")])
        store.create_mockboard(payload(text="third"))

        texts = [q.text for q in store.fetch_mockboard_questions()]

        assert texts == ["first", "second", "third"]
        assert all(
            q.category == QuestionCategory.MOCKBOARD for q in store.fetch_mockboard_questions()
        )

    def test_clear_and_delete(self, db):
        store = QuestionStore(db)
        rows = store.import_mockboard([payload(text=f"M{i}") for i in range(3)])

        assert store.delete_mockboard(rows[0].id) is True
        assert store.delete_mockboard(rows[0].id) is False
        assert store.clear_mockboard() == 2
        assert store.list_mockboard() == []

    def test_resolve_ids_spans_both_pools(self, db):
        store = QuestionStore(db)
        main = store.create(payload(text="main"))
        mock = store.import_mockboard([payload(text="mock")])[0]

        resolved = store.resolve_ids([mock.id, "missing", main.id])

        assert [q.text for q in resolved] == ["mock", "main"]
        assert resolved[0].category == QuestionCategory.MOCKBOARD


class TestScopedAdapters:
    def test_scoped_source_reads_and_writes(self, session_factory):
        source = ScopedQuestionSource(session_factory)

        created = source.add_question(payload(subject=Subject.SELECTION))

        assert [q.id for q in source.fetch_questions(subject=Subject.SELECTION)] == [created.id]
        assert source.fetch_mockboard_questions() == []

    def test_scoped_sink_updates_profile(self, session_factory, db, student):
        sink = ScopedScoreSink(session_factory)

        sink.record_standard_score(student.id, 7)
        sink.record_mock_score(student.id, 81.5)

        db.expire_all()
        profile = db.get(UserProfile, student.id)
        assert profile.standard_game_scores == [7]
        assert profile.mock_board_score == pytest.approx(81.5)

    def test_session_scope_discards_work_on_error(self, session_factory, db):
        opened = []

        def tracking_factory():
            session = session_factory()
            opened.append(session)
            return session

        with pytest.raises(RuntimeError):
            with session_scope(tracking_factory) as scoped:
                scoped.add(UserProfile(name="Ghost", role=UserRole.STUDENT.value))
                scoped.flush()
                raise RuntimeError("boom")

        assert len(opened) == 1
        assert not opened[0].in_transaction()
        assert db.execute(select(UserProfile).where(UserProfile.name == "Ghost")).first() is None


class TestRoomStore:
    def test_create_stores_password_and_order(self, db):
        room = RoomStore(db).create(RoomCreate(name="Batch A", password="pw", question_ids=["x"]))
        assert room.password == "pw"
        assert room.question_ids == ["x"]

    def test_verify_password(self, db):
        store = RoomStore(db)
        room = store.create(RoomCreate(name="Batch A", password="pw", question_ids=[]))

        assert store.verify_password(room.id, "pw") is True
        assert store.verify_password(room.id, "PW") is False
        assert store.verify_password("missing", "pw") is False

    def test_update_ignores_missing_fields(self, db):
        store = RoomStore(db)
        room = store.create(RoomCreate(name="Batch A", password="pw", question_ids=["a"]))

        updated = store.update(room.id, RoomUpdate(name="Batch B"))

        assert updated.name == "Batch B"
        assert updated.password == "pw"
        assert updated.question_ids == ["a"]

    def test_resolve_room_questions(self, db, seeded_questions):
        store = RoomStore(db)
        ids = [q.id for q in seeded_questions[:5]]
        room = store.create(RoomCreate(name="Batch A", password="pw", question_ids=ids))

        assert [q.id for q in store.resolve_room_questions(room.id)] == ids
        assert [q.id for q in store.resolve_room_questions(room.id, limit=2)] == ids[:2]
        assert store.resolve_room_questions("missing") is None

    def test_delete_room_with_questions_clears_mockboard_category(self, db):
        questions = QuestionStore(db)
        tagged = questions.create(payload(category=QuestionCategory.MOCKBOARD))
        kept = questions.create(payload())
        rooms = RoomStore(db)
        room = rooms.create(RoomCreate(name="R", password="pw", question_ids=[tagged.id]))

        assert rooms.delete(room.id) is True

        assert rooms.get(room.id) is None
        assert [q.id for q in questions.list_questions()] == [kept.id]

    def test_delete_empty_room_keeps_questions(self, db):
        questions = QuestionStore(db)
        questions.create(payload(category=QuestionCategory.MOCKBOARD))
        rooms = RoomStore(db)
        room = rooms.create(RoomCreate(name="R", password="pw", question_ids=[]))

        rooms.delete(room.id)

        assert len(questions.list_questions()) == 1
        assert rooms.delete(room.id) is False


class TestExamStore:
    def test_crud(self, db):
        store = ExamStore(db)
        exam = store.create(ExamCreate(title="Diagnostic", question_ids=["a", "b"], duration_minutes=30))

        updated = store.update(exam.id, ExamUpdate(duration_minutes=None))
        assert updated.duration_minutes is None
        assert updated.title == "Diagnostic"

        updated = store.update(exam.id, ExamUpdate(title=None, question_ids=["b"]))
        assert updated.title == "Diagnostic"
        assert updated.question_ids == ["b"]

        assert [e.id for e in store.list_exams()] == [exam.id]
        assert store.delete(exam.id) is True
        assert store.get(exam.id) is None


class TestUserStore:
    def test_login_creates_then_reuses_profile(self, db):
        store = UserStore(db)

        first = store.login("Bea", None, UserRole.STUDENT)
        second = store.login("Bea", None, UserRole.STUDENT)

        assert first.id == second.id
        assert first.lives == 10
        assert first.mock_board_score is None
        assert first.standard_game_scores == []

    def test_same_name_different_role_is_separate(self, db):
        store = UserStore(db)
        student = store.login("Bea", None, UserRole.STUDENT)
        librarian = store.login("Bea", None, UserRole.LIBRARIAN)
        assert student.id != librarian.id

    def test_admin_requires_passcode(self, db):
        store = UserStore(db)

        with pytest.raises(AuthError):
            store.login("root", "wrong", UserRole.ADMIN)

        admin = store.login("root", "123", UserRole.ADMIN)
        assert admin.role == UserRole.ADMIN.value

    def test_score_history_and_reset(self, db, student):
        store = UserStore(db)
        store.record_standard_score(student.id, 4)
        store.record_standard_score(student.id, 9)
        store.record_mock_score(student.id, 77.0)

        profile = store.get(student.id)
        assert profile.standard_game_scores == [4, 9]
        assert profile.mock_board_score == pytest.approx(77.0)

        reset = store.reset_stats(student.id)
        assert reset.standard_game_scores == []
        assert reset.mock_board_score is None
        assert reset.lives == 10

    def test_unknown_user_records_nothing(self, db):
        store = UserStore(db)
        assert store.record_mock_score("missing", 50.0) is None
        assert store.record_standard_score("missing", 1) is None
        assert store.reset_stats("missing") is None

    def test_leaderboard_excludes_admins_and_unscored(self, db):
        store = UserStore(db)
        for name, score in [("Cy", 80.0), ("Ann", 92.5), ("Bo", 80.0)]:
            profile = store.login(name, None, UserRole.STUDENT)
            store.record_mock_score(profile.id, score)
        store.login("Dee", None, UserRole.STUDENT)
        admin = store.login("root", "123", UserRole.ADMIN)
        store.record_mock_score(admin.id, 99.0)

        board = store.leaderboard(limit=10)

        assert [p.name for p in board] == ["Ann", "Bo", "Cy"]
        assert [p.name for p in store.leaderboard(limit=1)] == ["Ann"]
