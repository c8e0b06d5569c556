# mock_interview/models/interview_detail.py
# 면접 1문항(질문/답변/피드백) 단위 레코드
from sqlalchemy import Column, BigInteger, Integer, Boolean, Text, DateTime, Enum, ForeignKey, Index, func
from sqlalchemy.orm import relationship
from mock_interview.db.base import Base, BigIntId
from mock_interview.models.enums import Category, Level, Mode

class InterviewDetail(Base):
    __tablename__ = "interview_details"

    id = Column(BigIntId, primary_key=True, index=True)
    interview_id = Column(
        BigInteger,
        ForeignKey("interviews.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    category = Column(Enum(Category, name="detail_category", native_enum=False), nullable=False)
    mode = Column(Enum(Mode, name="detail_mode", native_enum=False), nullable=False)
    level = Column(Enum(Level, name="detail_level", native_enum=False), nullable=True)

    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=True)
    commentary = Column(Text, nullable=True)  # 답변 피드백
    score = Column(Integer, nullable=True)    # 0~100

    completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    answered_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('ix_interview_details_interview_id_completed', 'interview_id', 'completed'),
    )

    # 관계
    interview = relationship("Interview", back_populates="details")
