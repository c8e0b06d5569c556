"""
면접 질문 생성기
- LocalQuestionGenerator: 내장 질문 은행에서 카테고리별로 뽑는다
- OpenAIQuestionGenerator: OpenAI API로 사용자 수준/직무에 맞춰 생성, 실패 시 내장 은행으로 대체
"""
import json
import logging
import random
from typing import Dict, List, Optional

from openai import OpenAI

from mock_interview.config import settings
from mock_interview.models.enums import Category, Level

logger = logging.getLogger(__name__)


QUESTION_BANK: Dict[Category, List[str]] = {
    Category.LANGUAGE: [
        "자주 사용하는 언어에서 값 전달과 참조 전달의 차이를 설명해 주세요.",
        "가비지 컬렉션이 동작하는 방식과 성능에 미치는 영향을 설명해 주세요.",
        "인터페이스와 추상 클래스의 차이는 무엇인가요?",
        "불변 객체를 사용하면 얻을 수 있는 장점은 무엇인가요?",
        "예외를 checked/unchecked 로 나누는 기준을 설명해 주세요.",
        "제네릭을 사용하는 이유와 타입 소거에 대해 설명해 주세요.",
    ],
    Category.BACKEND: [
        "REST API 설계 시 리소스와 HTTP 메서드를 어떻게 매핑하나요?",
        "트랜잭션 격리 수준이 애플리케이션 동작에 어떤 영향을 주나요?",
        "세션 기반 인증과 토큰 기반 인증의 차이를 설명해 주세요.",
        "N+1 쿼리 문제가 무엇이고 어떻게 해결하나요?",
        "캐시를 도입할 때 일관성 문제를 어떻게 다루나요?",
        "서비스 간 비동기 메시징을 사용하는 이유는 무엇인가요?",
        "대용량 트래픽을 처리하기 위한 수평 확장 전략을 설명해 주세요.",
    ],
    Category.FRONTEND: [
        "브라우저가 HTML을 받아 화면을 그리기까지의 과정을 설명해 주세요.",
        "가상 DOM이 필요한 이유는 무엇인가요?",
        "CORS 오류가 발생하는 원인과 해결 방법을 설명해 주세요.",
        "상태 관리 라이브러리를 도입하는 기준은 무엇인가요?",
        "웹 접근성을 높이기 위해 고려하는 점을 말해 주세요.",
        "이벤트 버블링과 캡처링의 차이를 설명해 주세요.",
    ],
    Category.DATABASE: [
        "인덱스가 조회 성능을 높이는 원리와 단점을 설명해 주세요.",
        "정규화와 반정규화는 각각 언제 사용하나요?",
        "트랜잭션의 ACID 특성을 설명해 주세요.",
        "데드락이 발생하는 조건과 예방 방법을 말해 주세요.",
        "RDBMS와 NoSQL을 선택하는 기준은 무엇인가요?",
        "실행 계획을 보고 쿼리를 튜닝해 본 경험을 말해 주세요.",
    ],
    Category.NETWORK: [
        "TCP와 UDP의 차이를 설명해 주세요.",
        "브라우저에 URL을 입력했을 때 일어나는 일을 설명해 주세요.",
        "HTTPS 핸드셰이크 과정을 설명해 주세요.",
        "HTTP/1.1과 HTTP/2의 차이는 무엇인가요?",
        "로드 밸런서의 L4/L7 방식 차이를 설명해 주세요.",
        "DNS 조회 과정을 설명해 주세요.",
    ],
    Category.OPERATING_SYSTEM: [
        "프로세스와 스레드의 차이를 설명해 주세요.",
        "컨텍스트 스위칭 비용이 발생하는 이유는 무엇인가요?",
        "가상 메모리와 페이지 폴트에 대해 설명해 주세요.",
        "뮤텍스와 세마포어의 차이를 설명해 주세요.",
        "CPU 스케줄링 알고리즘 몇 가지를 비교해 주세요.",
        "교착 상태의 네 가지 조건을 설명해 주세요.",
    ],
    Category.DATA_STRUCTURE: [
        "배열과 연결 리스트의 차이를 설명해 주세요.",
        "해시 테이블의 충돌 해결 방법을 설명해 주세요.",
        "힙 자료구조의 특징과 활용 사례를 말해 주세요.",
        "이진 탐색 트리가 한쪽으로 치우치면 어떤 문제가 생기나요?",
        "BFS와 DFS를 각각 언제 사용하나요?",
        "동적 계획법이 적용 가능한 문제의 조건을 설명해 주세요.",
    ],
    Category.PERSONALITY: [
        "간단하게 자기소개를 해 주세요.",
        "팀원과 의견 충돌이 있었던 경험과 해결 과정을 말해 주세요.",
        "가장 어려웠던 프로젝트와 그 과정에서 배운 점은 무엇인가요?",
        "실패했던 경험과 이후 달라진 점을 말해 주세요.",
        "입사 후 이루고 싶은 목표는 무엇인가요?",
        "새로운 기술을 학습하는 본인만의 방법을 말해 주세요.",
    ],
}


def _item(category: Category, text: str) -> Dict:
    return {"category": category, "question": text}


class LocalQuestionGenerator:
    """내장 질문 은행에서 중복 없이 count개를 뽑는다."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate(self, user, category: Category, count: int) -> List[Dict]:
        pool = QUESTION_BANK[category]
        picked = self.rng.sample(pool, min(count, len(pool)))
        return [_item(category, q) for q in picked]


LEVEL_GUIDE = {
    Level.LV1: "입문자(전공 기초 수준)",
    Level.LV2: "신입 개발자",
    Level.LV3: "1~3년차 주니어",
    Level.LV4: "3~7년차 미들",
    Level.LV5: "시니어",
}


class OpenAIQuestionGenerator:
    """OpenAI API를 사용한 면접 질문 생성"""

    def __init__(self, fallback: Optional[LocalQuestionGenerator] = None):
        self.client = OpenAI(api_key=settings.openai_api_key)
        self.fallback = fallback or LocalQuestionGenerator()

    @staticmethod
    def build_prompt(user, category: Category, count: int) -> str:
        level = getattr(user, "level", None) or Level.LV2
        language = getattr(user, "language", None)
        position = getattr(user, "position", None)

        return f"""
<role>
당신은 개발자 기술 면접관입니다.
</role>

<goal>
'{category.label}' 분야의 면접 질문을 정확히 {count}개 만드세요.
</goal>

<candidate>
- 수준: {LEVEL_GUIDE[level]}
- 주 언어: {language.value if language else "미지정"}
- 희망 직무: {position.value if position else "미지정"}
</candidate>

<output>
JSON 외 다른 텍스트는 출력하지 마세요.
{{"questions": [{{"text": "질문"}}]}}
</output>
"""

    def generate(self, user, category: Category, count: int) -> List[Dict]:
        try:
            completion = self.client.chat.completions.create(
                model=settings.openai_model,
                response_format={"type": "json_object"},
                temperature=0.7,
                messages=[
                    {"role": "system", "content": "너는 한국어로 질문하는 기술 면접관이다."},
                    {"role": "user", "content": self.build_prompt(user, category, count)},
                ],
            )
            data = json.loads(completion.choices[0].message.content)
            texts = [
                (q.get("text") or "").strip()
                for q in data.get("questions", [])
                if isinstance(q, dict)
            ]
            texts = [t for t in texts if t][:count]
            if not texts:
                raise ValueError("model returned no questions")
            return [_item(category, t) for t in texts]

        except Exception as e:
            logger.warning("[QGEN] openai generation failed (%s), falling back to local bank: %r", category.value, e)
            return self.fallback.generate(user, category, count)


def get_question_generator():
    if settings.question_source == "openai":
        return OpenAIQuestionGenerator()
    return LocalQuestionGenerator()
