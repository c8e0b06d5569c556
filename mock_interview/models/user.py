# mock_interview/models/user.py
# User 테이블(SQLAlchemy) 스키마 정의
# 회원 가입/수정은 별도 서비스에서 처리하고 여기서는 조회만 한다.
from sqlalchemy import Column, String, DateTime, Enum, func
from sqlalchemy.orm import relationship
from mock_interview.db.base import Base, BigIntId
from mock_interview.models.enums import Language, Level, Position

class User(Base):
    __tablename__ = "users"

    id = Column(BigIntId, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # 해시된 비밀번호
    username = Column(String(100), nullable=False)
    language = Column(Enum(Language, name="user_language", native_enum=False), nullable=True)
    level = Column(
        Enum(Level, name="user_level", native_enum=False),
        nullable=False,
        default=Level.LV2,
    )
    position = Column(Enum(Position, name="user_position", native_enum=False), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # 관계
    interviews = relationship("Interview", back_populates="user")
