# mock_interview/models/interview.py
from sqlalchemy import (
    Column,
    BigInteger,
    String,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    func,
)
from sqlalchemy.orm import relationship
from mock_interview.db.base import Base, BigIntId
from mock_interview.models.enums import Mode


class Interview(Base):

    __tablename__ = "interviews"

    id = Column(BigIntId, primary_key=True, index=True)
    user_id = Column(BigInteger, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(100), nullable=True)
    mode = Column(Enum(Mode, name="interview_mode", native_enum=False), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # 관계
    user = relationship("User", back_populates="interviews")

    details = relationship(
        "InterviewDetail",
        back_populates="interview",
        cascade="all, delete-orphan",
        order_by="InterviewDetail.id",
        lazy="selectin",
    )

    def add_detail(self, detail) -> None:
        # back_populates 로 detail.interview 도 같이 세팅된다
        self.details.append(detail)

    def incomplete_details(self) -> list:
        return [d for d in self.details if not d.completed]
