"""
공용 DB 베이스/세션 팩토리.
SessionLocal, engine, Base 정의는 mock_interview.db.session 한 곳에서 관리한다.
"""
from sqlalchemy import BigInteger, Integer

from mock_interview.db.session import engine, SessionLocal, Base

# PK 타입: 운영(Postgres)은 BIGINT, SQLite는 INTEGER 여야 autoincrement 동작
BigIntId = BigInteger().with_variant(Integer(), "sqlite")

__all__ = ["engine", "SessionLocal", "Base", "BigIntId"]
