import json
import logging
from typing import Dict, Optional

from openai import OpenAI

from mock_interview.config import settings

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """
너는 한국어 기술 면접 코치이다. 면접 질문과 지원자의 답변을 분석하되 최종 출력은 아래 JSON 형식만 사용하라:

{
  "commentary": "",
  "score": 0
}

규칙:
- JSON 외 다른 텍스트 절대 금지.
- commentary는 '정확히 3문장'으로, '~합니다'체로 작성한다.
- 1문장: 답변의 정확성과 핵심 강점을 정리한다.
- 2문장: 빠졌거나 틀린 개념을 짚어 준다.
- 3문장: 더 좋은 답변을 위해 추가하면 좋을 내용을 제안한다.
- score는 0~100 사이 정수로 답변의 완성도를 평가한다.
"""

FALLBACK_COMMENTARY = "현재 답변 평가 중 오류가 발생했습니다. 잠시 후 다시 시도해 주세요."


def classify_length(answer_text: str) -> str:

    num_chars = len(answer_text.replace(" ", ""))

    if num_chars == 0:
        return "empty"
    elif num_chars < 80:
        return "very_short"
    elif num_chars < 300:
        return "normal"
    else:
        return "long"


# 로컬 채점: 길이 구간별 고정 피드백
LOCAL_FEEDBACK = {
    "empty": (0, "답변이 입력되지 않았습니다. 질문의 핵심 개념을 한두 문장으로라도 정리해 보세요."),
    "very_short": (40, "답변이 지나치게 짧아 이해도가 충분히 드러나지 않습니다. 개념의 정의와 함께 실제 사용 경험이나 예시를 덧붙여 보세요."),
    "normal": (70, "핵심 내용을 적절한 분량으로 설명했습니다. 장단점이나 대안을 함께 비교하면 더 설득력 있는 답변이 됩니다."),
    "long": (80, "충분한 분량으로 상세하게 답변했습니다. 결론을 먼저 말하고 근거를 덧붙이는 구조로 정리하면 전달력이 좋아집니다."),
}


class AnswerEvaluationService:

    def __init__(self, use_openai: Optional[bool] = None):
        if use_openai is None:
            use_openai = settings.question_source == "openai"
        self.use_openai = use_openai

    @staticmethod
    def evaluate_locally(answer_text: str) -> Dict:
        score, commentary = LOCAL_FEEDBACK[classify_length(answer_text or "")]
        return {"commentary": commentary, "score": score}

    def evaluate_answer(self, question: str, answer_text: str) -> Dict:
        if not self.use_openai or not (answer_text or "").strip():
            return self.evaluate_locally(answer_text)

        try:
            client = OpenAI(api_key=settings.openai_api_key)
            completion = client.chat.completions.create(
                model=settings.openai_model,
                response_format={"type": "json_object"},
                temperature=0.2,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": f"질문: {question}\n답변: {answer_text}"},
                ],
            )

            data = json.loads(completion.choices[0].message.content)

            score = data.get("score")
            try:
                score = max(0, min(100, int(score)))
            except (TypeError, ValueError):
                score = None

            return {
                "commentary": data.get("commentary") or "모델이 commentary 필드를 반환하지 않았습니다.",
                "score": score,
            }

        except Exception:
            logger.exception("[ANSWER] openai evaluation failed")
            return {"commentary": FALLBACK_COMMENTARY, "score": None}
