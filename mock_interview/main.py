# mock_interview/main.py

# ------------------------
# 환경 변수 로드
# ------------------------
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

# ------------------------
# FastAPI, CORS 미들웨어 import
# ------------------------
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mock_interview.config import settings
from mock_interview.db.base import Base, engine

# 테이블 생성 전에 모든 모델을 등록
from mock_interview.models import user, interview, interview_detail  # noqa: F401
from mock_interview.routers import mock_interviews as mock_interviews_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s:%(name)s:%(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)
        logger.info("tables ensured (env=%s)", settings.app_env)
    yield

# ------------------------
# 1) FastAPI 앱 생성
# ------------------------
app = FastAPI(title="Mock Interview API", lifespan=lifespan)

# ------------------------
# 2) CORS 미들웨어 추가
#    - 세션 쿠키 사용하므로 credentials 허용, 오리진은 설정값으로 제한
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------
# 3) 라우터 등록
# ------------------------
app.include_router(mock_interviews_router.router)

# ------------------------
# 4) Root 엔드포인트 (health check)
# ------------------------
@app.get("/")
def root():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("mock_interview.main:app", host=settings.host, port=settings.port, reload=settings.app_env == "local")
