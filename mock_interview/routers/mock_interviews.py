from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Query, Response
from sqlalchemy.orm import Session

from mock_interview.deps import get_db, get_current_principal, get_session_context
from mock_interview.models.enums import Category
from mock_interview.schemas.interview import (
    AnswerIn,
    InterviewOut,
    InterviewResultDetail,
    QuestionOut,
)
from mock_interview.services.interview_service import InterviewService, get_interview_service

router = APIRouter(prefix="/api/mock-interviews", tags=["mock-interviews"])


# 1) 연습 면접 시작 (카테고리 단위)
@router.post("/practice", response_model=InterviewOut)
def create_practice_interview(
    category: Category = Query(..., description="연습할 카테고리"),
    db: Session = Depends(get_db),
    principal=Depends(get_current_principal),
    ctx=Depends(get_session_context),
    service: InterviewService = Depends(get_interview_service),
):
    interview = service.create_practice_interview(db, category, principal, ctx)
    return InterviewOut.from_interview(interview)


# 2) 실전 면접 시작 (전체 카테고리)
@router.post("/real", response_model=InterviewOut)
def create_real_interview(
    db: Session = Depends(get_db),
    principal=Depends(get_current_principal),
    ctx=Depends(get_session_context),
    service: InterviewService = Depends(get_interview_service),
):
    interview = service.create_real_interview(db, principal, ctx)
    return InterviewOut.from_interview(interview)


# 3) 다음 질문 조회. 질문이 없으면 null
@router.get("/next", response_model=Optional[QuestionOut])
def next_question(
    ctx=Depends(get_session_context),
    service: InterviewService = Depends(get_interview_service),
):
    return service.get_next_question(ctx)


# 4) 답변 제출 + 다음 질문. 답변 기록은 응답 이후 백그라운드에서 처리
@router.post("/next", response_model=Optional[QuestionOut])
def answer_and_next_question(
    background_tasks: BackgroundTasks,
    payload: AnswerIn = Body(...),
    ctx=Depends(get_session_context),
    service: InterviewService = Depends(get_interview_service),
):
    return service.process_answer_and_get_next_question(ctx, payload, background_tasks)


# 5) 마지막 답변 제출. 동기 기록 후 결과 반환
@router.post("/last", response_model=List[InterviewResultDetail])
def last_question(
    payload: AnswerIn = Body(...),
    db: Session = Depends(get_db),
    ctx=Depends(get_session_context),
    service: InterviewService = Depends(get_interview_service),
):
    return service.last_question(db, payload, ctx)


# 6) 현재 세션 면접 결과
@router.get("/summary", response_model=List[InterviewResultDetail])
def summary_interview(
    db: Session = Depends(get_db),
    ctx=Depends(get_session_context),
    service: InterviewService = Depends(get_interview_service),
):
    return service.summary_interview(db, ctx)


# 7) 미완료 면접 이어하기
@router.post("/{interview_id}/resume", response_model=InterviewOut)
def resume_interview(
    interview_id: int,
    db: Session = Depends(get_db),
    ctx=Depends(get_session_context),
    service: InterviewService = Depends(get_interview_service),
):
    interview = service.load_incomplete_interview(db, interview_id, ctx)
    return InterviewOut.from_interview(interview)


# 8) 면접 문항별 결과
@router.get("/{interview_id}/details", response_model=List[InterviewResultDetail])
def get_interview_details(
    interview_id: int,
    db: Session = Depends(get_db),
    service: InterviewService = Depends(get_interview_service),
):
    return service.get_interview_details_by_id(db, interview_id)


# 9) 면접 요약 조회
@router.get("/{interview_id}", response_model=InterviewOut)
def get_interview(
    interview_id: int,
    db: Session = Depends(get_db),
    service: InterviewService = Depends(get_interview_service),
):
    return service.get_interview_by_id(db, interview_id)


# 10) 면접 삭제
@router.delete("/{interview_id}", status_code=204)
def delete_interview(
    interview_id: int,
    db: Session = Depends(get_db),
    service: InterviewService = Depends(get_interview_service),
):
    service.delete_interviews_by_id(db, interview_id)
    return Response(status_code=204)
