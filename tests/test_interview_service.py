"""
Tests for InterviewService, called directly without HTTP.
"""

import pytest
from fastapi import BackgroundTasks

from mock_interview.errors import AuthenticationError, NotFoundError, ValidationError
from mock_interview.models.enums import Category, Level, Mode
from mock_interview.models.interview import Interview
from mock_interview.models.interview_detail import InterviewDetail
from mock_interview.schemas.interview import AnswerIn
from mock_interview.services.answer_eval import AnswerEvaluationService
from mock_interview.services.interview_detail_service import InterviewDetailService
from mock_interview.services.interview_service import InterviewService
from mock_interview.services.auth import Principal
from mock_interview.services.session_store import InterviewSessionState


@pytest.fixture
def principal(user_id) -> Principal:
    return Principal(user_id=user_id)


@pytest.fixture
def ctx() -> InterviewSessionState:
    return InterviewSessionState()


class TestCreate:

    def test_practice_interview_seeds_session(self, service, db, principal, ctx):
        interview = service.create_practice_interview(db, Category.BACKEND, principal, ctx)

        assert interview.mode == Mode.PRACTICE
        assert len(interview.details) == 5
        assert all(d.level == Level.LV2 for d in interview.details)
        assert ctx.interview_id == interview.id
        assert ctx.cursor == 0
        assert [q.id for q in ctx.questions] == [d.id for d in interview.details]

    def test_practice_accepts_category_name(self, service, db, principal, ctx):
        interview = service.create_practice_interview(db, "network", principal, ctx)
        assert {d.category for d in interview.details} == {Category.NETWORK}

    def test_practice_rejects_unknown_category(self, service, db, principal, ctx):
        with pytest.raises(ValidationError) as exc:
            service.create_practice_interview(db, "cooking", principal, ctx)
        assert exc.value.status_code == 422
        assert ctx.questions is None

    def test_missing_principal_raises_and_writes_nothing(self, service, db, ctx):
        with pytest.raises(AuthenticationError):
            service.create_real_interview(db, None, ctx)

        assert db.query(Interview).count() == 0
        assert ctx.interview_id is None

    def test_real_interview_asks_every_category(self, service, generator, db, principal, ctx):
        interview = service.create_real_interview(db, principal, ctx)

        assert interview.mode == Mode.REAL
        assert [c for c, _ in generator.calls] == list(Category)
        assert len(ctx.questions) == len(Category)

    def test_generator_failure_rolls_back_whole_interview(self, db, principal, ctx):
        class BrokenGenerator:
            def generate(self, user, category, count):
                raise RuntimeError("question source down")

        broken = InterviewService(InterviewDetailService(
            generator=BrokenGenerator(),
            evaluator=AnswerEvaluationService(use_openai=False),
        ))

        with pytest.raises(RuntimeError):
            broken.create_practice_interview(db, Category.BACKEND, principal, ctx)

        assert db.query(Interview).count() == 0
        assert db.query(InterviewDetail).count() == 0
        assert ctx.questions is None
        assert ctx.interview_id is None


class TestSequencing:

    def test_each_question_served_once_then_exhausted(self, service, db, principal, ctx):
        service.create_practice_interview(db, Category.DATABASE, principal, ctx)
        expected = list(ctx.questions)

        served = [service.get_next_question(ctx) for _ in range(len(expected))]

        assert served == expected
        assert ctx.cursor == len(expected)
        for _ in range(3):
            assert service.get_next_question(ctx) is None
        assert ctx.cursor == len(expected)

    def test_empty_session_returns_none(self, service):
        assert service.get_next_question(InterviewSessionState()) is None


class TestResume:

    def test_completed_details_are_skipped(self, service, db, principal, ctx):
        interview = service.create_practice_interview(db, Category.FRONTEND, principal, ctx)
        done_ids = {interview.details[0].id, interview.details[3].id}
        for d in interview.details:
            if d.id in done_ids:
                d.completed = True
        db.commit()

        resumed = InterviewSessionState()
        service.load_incomplete_interview(db, interview.id, resumed)

        assert resumed.cursor == 0
        assert resumed.interview_id == interview.id
        assert len(resumed.questions) == 3
        assert not done_ids & {q.id for q in resumed.questions}

    def test_fully_completed_interview_resumes_empty(self, service, db, principal, ctx):
        interview = service.create_practice_interview(db, Category.FRONTEND, principal, ctx)
        for d in interview.details:
            d.completed = True
        db.commit()

        resumed = InterviewSessionState()
        service.load_incomplete_interview(db, interview.id, resumed)

        assert resumed.questions == []
        assert service.get_next_question(resumed) is None

    def test_unknown_interview(self, service, db, ctx):
        with pytest.raises(NotFoundError):
            service.load_incomplete_interview(db, 404, ctx)


class TestAnswers:

    def test_background_recording_failure_is_dropped(self, service, db, caplog):
        service.detail_service.record_answer_in_background(AnswerIn(id=999, answer="..."), 1)

        assert "background recording failed" in caplog.text

    def test_last_question_marks_interview_complete(self, service, db, principal, ctx):
        interview = service.create_practice_interview(db, Category.LANGUAGE, principal, ctx)
        last = ctx.questions[-1]

        results = service.last_question(db, AnswerIn(id=last.id, answer=""), ctx)

        db.expire_all()
        assert db.get(Interview, interview.id).completed is True
        assert results[-1].completed is True
        assert results[-1].score == 0
        assert sum(r.completed for r in results) == 1

    def test_summary_lists_every_detail(self, service, db, principal, ctx):
        service.create_practice_interview(db, Category.PERSONALITY, principal, ctx)

        results = service.summary_interview(db, ctx)

        assert [r.id for r in results] == [q.id for q in ctx.questions]

    def test_answer_for_other_interview_is_rejected(self, service, db, principal, ctx):
        service.create_practice_interview(db, Category.BACKEND, principal, ctx)
        other_ctx = InterviewSessionState()
        other = service.create_practice_interview(db, Category.NETWORK, principal, other_ctx)
        foreign_id = other_ctx.questions[0].id

        with pytest.raises(ValidationError):
            service.last_question(db, AnswerIn(id=foreign_id, answer="남의 문항"), ctx)

        db.expire_all()
        assert db.get(Interview, ctx.interview_id).completed is False
        assert db.get(InterviewDetail, foreign_id).completed is False
        assert db.get(Interview, other.id).completed is False

    def test_next_with_foreign_answer_queues_nothing(self, service, db, principal, ctx):
        service.create_practice_interview(db, Category.BACKEND, principal, ctx)
        tasks = BackgroundTasks()

        with pytest.raises(ValidationError):
            service.process_answer_and_get_next_question(ctx, AnswerIn(id=424242, answer="x"), tasks)

        assert tasks.tasks == []
        assert ctx.cursor == 0

    def test_next_without_interview_is_not_found(self, service):
        tasks = BackgroundTasks()
        with pytest.raises(NotFoundError):
            service.process_answer_and_get_next_question(
                InterviewSessionState(), AnswerIn(id=1, answer="x"), tasks)
        assert tasks.tasks == []

    def test_record_answer_checks_owning_interview(self, service, db, principal, ctx):
        interview = service.create_practice_interview(db, Category.DATABASE, principal, ctx)
        detail_id = ctx.questions[0].id

        with pytest.raises(ValidationError):
            service.detail_service.record_answer(db, AnswerIn(id=detail_id, answer="x"), interview.id + 1)
        db.rollback()

        assert db.get(InterviewDetail, detail_id).completed is False


class TestDelete:

    def test_delete_cascades(self, service, db, principal, ctx):
        interview = service.create_practice_interview(db, Category.BACKEND, principal, ctx)
        interview_id = interview.id

        service.delete_interviews_by_id(db, interview_id)

        assert db.query(InterviewDetail).count() == 0
        with pytest.raises(NotFoundError):
            service.get_interview_by_id(db, interview_id)

    def test_delete_unknown(self, service, db):
        with pytest.raises(NotFoundError):
            service.delete_interviews_by_id(db, 1)
