# mock_interview/deps.py
import logging
from fastapi import Header, Request, Response
from mock_interview.config import settings
from mock_interview.db.base import SessionLocal
from mock_interview.errors import AuthenticationError
from mock_interview.services.auth import Principal, principal_from_header
from mock_interview.services.session_store import InterviewSessionState, SessionStore

logger = logging.getLogger(__name__)

session_store = SessionStore(ttl_seconds=settings.session_ttl_seconds)

# ----------------------------
# DB 세션
# ----------------------------
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()  # 서비스에서 commit 하지 않은 변경분 정리
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

# ----------------------------
# 현재 사용자(Principal) 가져오기
# - 헤더가 없으면 None, 인증 필요 여부는 서비스에서 판단
# ----------------------------
def get_current_principal(
    authorization: str | None = Header(None),
) -> Principal | None:
    try:
        return principal_from_header(authorization)
    except ValueError as e:
        logger.info("verify_bearer failed >>> %r", e)
        raise AuthenticationError("Invalid token")

# ----------------------------
# 면접 진행 세션(쿠키) 가져오기
# ----------------------------
def get_session_context(request: Request, response: Response) -> InterviewSessionState:
    cookie_name = settings.session_cookie_name
    session_id, state, created = session_store.get_or_create(request.cookies.get(cookie_name))
    if created:
        response.set_cookie(
            cookie_name,
            session_id,
            max_age=settings.session_ttl_seconds,
            httponly=True,
            samesite="lax",
        )
    return state
