"""
모의면접 진행 비즈니스 로직
- 연습/실전 면접 생성 + 세션에 질문 목록 적재
- 다음 질문 제공(세션 커서 전진)
- 답변 기록(백그라운드 / 마지막 문항은 동기)
- 결과 조회, 삭제
"""
import logging
from typing import List, Optional

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from mock_interview.errors import AuthenticationError, NotFoundError, ValidationError
from mock_interview.models.enums import Category, Mode
from mock_interview.models.interview import Interview
from mock_interview.models.interview_detail import InterviewDetail
from mock_interview.models.user import User
from mock_interview.schemas.interview import (
    AnswerIn,
    InterviewOut,
    InterviewResultDetail,
    QuestionOut,
)
from mock_interview.services.auth import Principal
from mock_interview.services.interview_detail_service import InterviewDetailService, mode_title
from mock_interview.services.session_store import InterviewSessionState

logger = logging.getLogger(__name__)


def _parse_category(category) -> Category:
    if isinstance(category, Category):
        return category
    try:
        return Category(str(category).upper())
    except ValueError:
        raise ValidationError(f"unknown category: {category!r}") from None


def _snapshot(details: List[InterviewDetail]) -> List[QuestionOut]:
    return [QuestionOut.model_validate(d) for d in details]


class InterviewService:
    """면접 생명주기 관리"""

    def __init__(self, detail_service: InterviewDetailService):
        self.detail_service = detail_service

    # 현재 인증된 사용자 조회
    @staticmethod
    def _get_current_user(db: Session, principal: Optional[Principal]) -> User:
        if principal is None:
            raise AuthenticationError()

        user = db.get(User, principal.current_user_id())
        if user is None:
            raise NotFoundError("user_not_found", f"id={principal.current_user_id()}")
        return user

    @staticmethod
    def _get_interview(db: Session, interview_id: int) -> Interview:
        interview = db.get(Interview, interview_id)
        if interview is None:
            raise NotFoundError("interview_not_found", f"id={interview_id}")
        return interview

    def _start_interview(
        self,
        db: Session,
        principal: Optional[Principal],
        ctx: InterviewSessionState,
        mode: Mode,
        category: Optional[Category] = None,
    ) -> Interview:
        try:
            user = self._get_current_user(db, principal)

            interview = Interview(
                title=mode_title(mode, category),
                mode=mode,
                user_id=user.id,
                completed=False,
            )
            db.add(interview)
            db.flush()  # interview.id 생성

            if mode == Mode.PRACTICE:
                self.detail_service.practice_mode_starter(db, interview, category, user)
            else:
                self.detail_service.real_mode_starter(db, interview, user)

            questions = _snapshot(interview.details)
            db.commit()
        except Exception:
            db.rollback()
            raise

        ctx.seed(interview.id, questions)
        logger.info("[INTERVIEW] started id=%s mode=%s user=%s questions=%d",
                    interview.id, mode.value, interview.user_id, len(questions))
        return interview

    def create_practice_interview(self, db: Session, category, principal: Optional[Principal],
                                  ctx: InterviewSessionState) -> Interview:
        return self._start_interview(db, principal, ctx, Mode.PRACTICE, _parse_category(category))

    def create_real_interview(self, db: Session, principal: Optional[Principal],
                              ctx: InterviewSessionState) -> Interview:
        return self._start_interview(db, principal, ctx, Mode.REAL)

    def load_incomplete_interview(self, db: Session, interview_id: int,
                                  ctx: InterviewSessionState) -> Interview:
        """이어하기: 아직 답하지 않은 문항만 세션에 다시 적재"""
        interview = self._get_interview(db, interview_id)
        remaining = _snapshot(interview.incomplete_details())
        ctx.seed(interview.id, remaining)
        logger.info("[INTERVIEW] resumed id=%s remaining=%d", interview.id, len(remaining))
        return interview

    @staticmethod
    def _check_answer_in_session(ctx: InterviewSessionState, answer: AnswerIn) -> int:
        # 현재 세션 면접의 문항에 대한 답변만 받는다
        if ctx.interview_id is None:
            raise NotFoundError("interview_not_found", "no active interview in session")
        if not ctx.has_question(answer.id):
            raise ValidationError(f"question {answer.id} is not part of interview {ctx.interview_id}")
        return ctx.interview_id

    @staticmethod
    def get_next_question(ctx: InterviewSessionState) -> Optional[QuestionOut]:
        return ctx.advance()

    def process_answer_and_get_next_question(
        self,
        ctx: InterviewSessionState,
        answer: AnswerIn,
        background_tasks: BackgroundTasks,
    ) -> Optional[QuestionOut]:
        interview_id = self._check_answer_in_session(ctx, answer)
        next_question = self.get_next_question(ctx)
        # 응답 후 실행, 결과/오류는 호출자에게 전달되지 않는다
        background_tasks.add_task(self.detail_service.record_answer_in_background, answer, interview_id)
        logger.debug("[ANSWER] queued detail=%s remaining=%d", answer.id, ctx.remaining())
        return next_question

    def last_question(self, db: Session, answer: AnswerIn,
                      ctx: InterviewSessionState) -> List[InterviewResultDetail]:
        """마지막 문항은 동기로 기록하고 면접을 완료 처리한다."""
        interview_id = self._check_answer_in_session(ctx, answer)

        try:
            interview = self._get_interview(db, interview_id)
            self.detail_service.record_answer(db, answer, interview_id)
            interview.completed = True
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info("[INTERVIEW] completed id=%s", interview.id)
        return self.get_interview_details_by_id(db, interview.id)

    def summary_interview(self, db: Session, ctx: InterviewSessionState) -> List[InterviewResultDetail]:
        if ctx.interview_id is None:
            raise NotFoundError("interview_not_found", "no active interview in session")
        return self.get_interview_details_by_id(db, ctx.interview_id)

    def get_interview_details_by_id(self, db: Session, interview_id: int) -> List[InterviewResultDetail]:
        interview = self._get_interview(db, interview_id)
        return [InterviewResultDetail.model_validate(d) for d in interview.details]

    def get_interview_by_id(self, db: Session, interview_id: int) -> InterviewOut:
        return InterviewOut.from_interview(self._get_interview(db, interview_id))

    def delete_interviews_by_id(self, db: Session, interview_id: int) -> None:
        try:
            interview = self._get_interview(db, interview_id)
            db.delete(interview)  # details 는 cascade 로 함께 삭제
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("[INTERVIEW] deleted id=%s", interview_id)


_interview_service: Optional[InterviewService] = None


def get_interview_service() -> InterviewService:
    """라우터 의존성: 전역 서비스 싱글턴"""
    global _interview_service
    if _interview_service is None:
        _interview_service = InterviewService(InterviewDetailService())
    return _interview_service
