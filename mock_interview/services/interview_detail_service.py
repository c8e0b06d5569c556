"""
면접 문항(InterviewDetail) 관련 로직
- 연습/실전 모드 질문 생성 후 면접에 붙이기
- 답변 기록 + 채점 (동기 / 백그라운드)
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List

from sqlalchemy.orm import Session

from mock_interview.config import settings
from mock_interview.db.session import SessionLocal
from mock_interview.errors import NotFoundError, ValidationError
from mock_interview.models.enums import Category, Level, Mode
from mock_interview.models.interview import Interview
from mock_interview.models.interview_detail import InterviewDetail
from mock_interview.schemas.interview import AnswerIn
from mock_interview.services.answer_eval import AnswerEvaluationService
from mock_interview.services.question_generator import get_question_generator

logger = logging.getLogger(__name__)


class InterviewDetailService:

    def __init__(
        self,
        generator=None,
        evaluator: AnswerEvaluationService | None = None,
        session_factory: Callable[[], Session] = SessionLocal,
    ):
        self.generator = generator or get_question_generator()
        self.evaluator = evaluator or AnswerEvaluationService()
        self.session_factory = session_factory

    def _append_details(self, interview: Interview, user, category: Category, count: int) -> List[InterviewDetail]:
        items = self.generator.generate(user, category, count)
        created = []
        for item in items:
            detail = InterviewDetail(
                category=item["category"],
                mode=interview.mode,
                level=getattr(user, "level", None) or Level.LV2,
                question=item["question"],
                completed=False,
            )
            interview.add_detail(detail)
            created.append(detail)
        return created

    def practice_mode_starter(self, db: Session, interview: Interview, category: Category, user) -> List[InterviewDetail]:
        created = self._append_details(interview, user, category, settings.practice_question_count)
        db.flush()
        logger.info("[INTERVIEW] practice details created interview=%s category=%s count=%d",
                    interview.id, category.value, len(created))
        return created

    def real_mode_starter(self, db: Session, interview: Interview, user) -> List[InterviewDetail]:
        created = []
        for category in Category:
            created.extend(
                self._append_details(interview, user, category, settings.real_questions_per_category)
            )
        db.flush()
        logger.info("[INTERVIEW] real details created interview=%s count=%d", interview.id, len(created))
        return created

    def record_answer(self, db: Session, answer: AnswerIn, interview_id: int) -> InterviewDetail:
        """답변 채점 후 저장. commit 은 호출자가 한다."""
        detail = db.get(InterviewDetail, answer.id)
        if detail is None:
            raise NotFoundError("interview_detail_not_found", f"id={answer.id}")
        if detail.interview_id != interview_id:
            raise ValidationError(f"question {answer.id} is not part of interview {interview_id}")

        result = self.evaluator.evaluate_answer(detail.question, answer.answer)

        detail.answer = answer.answer
        detail.commentary = result.get("commentary")
        detail.score = result.get("score")
        detail.completed = True
        detail.answered_at = datetime.now(timezone.utc)
        db.flush()

        logger.info("[ANSWER] recorded detail=%s interview=%s score=%s",
                    detail.id, detail.interview_id, detail.score)
        return detail

    def record_answer_in_background(self, answer: AnswerIn, interview_id: int) -> None:
        # 요청 세션과 분리된 별도 DB 세션 사용. 실패는 로그만 남기고 버린다.
        db = self.session_factory()
        try:
            self.record_answer(db, answer, interview_id)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("[ANSWER] background recording failed detail=%s", answer.id)
        finally:
            db.close()


def mode_title(mode: Mode, category: Category | None = None) -> str:
    if mode == Mode.PRACTICE and category is not None:
        return f"{category.label} 연습 면접"
    return "실전 모의 면접"
