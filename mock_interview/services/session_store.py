# 면접 진행 상태(질문 목록/커서/면접 ID)를 세션 쿠키 단위로 보관하는 in-memory 저장소.
# 서버 재시작이나 TTL 만료 시 상태는 사라진다.
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from mock_interview.schemas.interview import QuestionOut


@dataclass
class InterviewSessionState:
    """
    세션 하나의 면접 진행 상태.
    cursor 는 항상 0 <= cursor <= len(questions), cursor == len(questions) 이면 질문 소진.
    """
    questions: Optional[List[QuestionOut]] = None
    cursor: Optional[int] = None
    interview_id: Optional[int] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
    # 처음 seed 될 때 저장소에 등록하는 콜백 (SessionStore 가 세팅)
    on_seed: Optional[Callable[["InterviewSessionState"], None]] = field(default=None, repr=False, compare=False)

    def seed(self, interview_id: int, questions: List[QuestionOut]) -> None:
        with self.lock:
            self.questions = list(questions)
            self.cursor = 0
            self.interview_id = interview_id
            register, self.on_seed = self.on_seed, None
        if register is not None:
            register(self)

    def has_question(self, detail_id: int) -> bool:
        # 이 세션 면접에 적재된 문항인지
        with self.lock:
            return self.questions is not None and any(q.id == detail_id for q in self.questions)

    def advance(self) -> Optional[QuestionOut]:
        # 현재 커서의 질문을 꺼내고 커서를 한 칸 전진
        with self.lock:
            if self.questions is None or self.cursor is None:
                return None
            if self.cursor >= len(self.questions):
                return None
            question = self.questions[self.cursor]
            self.cursor += 1
            return question

    def remaining(self) -> int:
        with self.lock:
            if self.questions is None or self.cursor is None:
                return 0
            return len(self.questions) - self.cursor


class SessionStore:
    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._states: Dict[str, InterviewSessionState] = {}
        self._touched: Dict[str, float] = {}
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        expired = [sid for sid, t in self._touched.items() if now - t >= self.ttl_seconds]
        for sid in expired:
            self._states.pop(sid, None)
            self._touched.pop(sid, None)

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, InterviewSessionState, bool]:
        """(session_id, state, created) 반환. 모르는/만료된 ID 면 아직 등록되지 않은 새 세션을 만든다."""
        now = self._clock()
        with self._lock:
            self._prune(now)
            if session_id and session_id in self._states:
                self._touched[session_id] = now
                return session_id, self._states[session_id], False

            # 면접이 실제로 시작(seed)될 때까지는 저장소에 올리지 않는다
            new_id = uuid.uuid4().hex
            state = InterviewSessionState(on_seed=lambda s: self._register(new_id, s))
            return new_id, state, True

    def _register(self, session_id: str, state: InterviewSessionState) -> None:
        with self._lock:
            self._states[session_id] = state
            self._touched[session_id] = self._clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
