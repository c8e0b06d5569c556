from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

from mock_interview.models.enums import Category, Mode

# -- Request --

# 답변 제출 - 요청 (POST /next, /last)
class AnswerIn(BaseModel):
    id: int = Field(..., description="답변 대상 interview_detail ID")
    question: Optional[str] = Field(None, description="질문 원문(클라이언트 표시용)")
    answer: str = Field("", max_length=5000, description="사용자 답변")


# -- Response --

# 다음 질문 - 응답. 세션에 저장하는 질문 스냅샷도 이 모델을 그대로 쓴다.
class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    interview_id: int
    category: Category
    question: str

# 면접 요약 - 응답
class InterviewOut(BaseModel):
    id: int
    title: Optional[str]
    mode: Mode
    user_id: int
    completed: bool
    question_count: int
    created_at: Optional[datetime]

    @classmethod
    def from_interview(cls, interview) -> "InterviewOut":
        return cls(
            id=interview.id,
            title=interview.title,
            mode=interview.mode,
            user_id=interview.user_id,
            completed=bool(interview.completed),
            question_count=len(interview.details),
            created_at=interview.created_at,
        )

# 문항별 결과/피드백 - 응답
class InterviewResultDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category: Category
    question: str
    answer: Optional[str] = None
    commentary: Optional[str] = None
    score: Optional[int] = None
    completed: bool
    answered_at: Optional[datetime] = None
