# mock_interview/config.py

from typing import Literal
from dotenv import load_dotenv
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()  # .env 파일 먼저 읽기

BASE_DIR = Path(__file__).resolve().parent.parent

class Settings(BaseSettings):
    # 환경 구분
    app_env: str = "local"
    log_level: str = "INFO"

    # 서버 실행 / CORS
    host: str = "127.0.0.1"
    port: int = 8000
    cors_allow_origins: list[str] = ["http://localhost:3000"]  # JSON 배열로 지정

    # DB 필수 설정
    database_url: str                        # DATABASE_URL
    auto_create_tables: bool = True          # 기동 시 테이블 자동 생성

    # JWT 인증
    jwt_secret: str                          # JWT_SECRET
    jwt_algorithm: str = "HS256"

    # OpenAI
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"

    # 질문 생성/채점 방식: openai | local(내장 질문 은행)
    question_source: Literal["openai", "local"] = "local"
    practice_question_count: int = 5         # 연습 모드 질문 수
    real_questions_per_category: int = 1     # 실전 모드 카테고리별 질문 수

    # 세션(쿠키) 설정
    session_cookie_name: str = "MOCK_INTERVIEW_SESSION"
    session_ttl_seconds: int = 60 * 30

    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),  # 루트 .env 절대경로
        env_file_encoding="utf-8",
        extra="ignore",                   # 필요 없는 env 무시
    )

settings = Settings()
