"""Grading feedback for a finished quiz attempt, generated by Gemini.

The prompt asks the model to compare every answer itself and to return one
HTML fragment with a fixed class structure that the frontend renders as-is.
Transient overload (HTTP 503 from the backend) is retried a bounded number of
times with linear backoff; every other failure is raised immediately.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol, Sequence

from google import genai
from google.genai import errors as genai_errors

from ..errors import UpstreamOverloaded

logger = logging.getLogger(__name__)

NO_ANSWER = "Không trả lời"

MAX_ATTEMPTS = 4
BASE_DELAY_SECONDS = 0.5

PROMPT_TEMPLATE = """Bạn là giáo viên tiếng Anh. Hãy CHẤM ĐIỂM và GIẢI THÍCH ngắn gọn, dễ hiểu cho học viên.

Thông tin bài làm (câu hỏi, đáp án đúng, đáp án user chọn):
{items}

Yêu cầu xuất HTML:
- Viết bằng tiếng Việt.
- TRẢ VỀ DUY NHẤT một đoạn HTML, KHÔNG dùng markdown, KHÔNG dùng ` ``` `.
- Cấu trúc HTML cần giống ví dụ này (chỉ là ví dụ, nội dung tự thay bằng dữ liệu thật):
  <div class="quiz-feedback">
    <p class="summary">Kết quả: bạn đúng 8 / 10 câu.</p>
    <div class="questions">
      <div class="question">
        <p class="question-title">Câu 1: [nội dung câu hỏi]</p>
        <p class="question-status correct">Đúng</p>
        <p class="question-user-answer"><strong>Em chọn:</strong> [đáp án user chọn]</p>
        <p class="question-correct-answer"><strong>Đáp án đúng:</strong> [đáp án đúng]</p>
        <p class="question-explanation">[Giải thích ngắn gọn vì sao đáp án đúng là đúng, và nếu em sai thì sai chỗ nào]</p>
      </div>
      <!-- lặp lại cho các câu tiếp theo -->
    </div>
  </div>
- class "correct" dùng cho câu đúng, class "wrong" dùng cho câu sai (question-status wrong).
- Hãy đi lần lượt từng câu theo thứ tự từ Câu 1, Câu 2, ... và thay dữ liệu thật vào đúng chỗ.
- Kết quả tổng (bạn đúng X / N câu) phải dựa trên việc so sánh đáp án user chọn với đáp án đúng.

Chỉ trả về HTML (không thêm chú thích ngoài HTML)."""


class TextBackend(Protocol):
    async def generate(self, prompt: str) -> str: ...


class GeminiBackend:
    """google-genai async client; one ``generate_content`` call per attempt."""

    def __init__(self, api_key: str, model: str):
        self.client = genai.Client(api_key=api_key)
        self.model = model

    async def generate(self, prompt: str) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
        )
        return response.text or ""


def resolve_answer(answers: Sequence[Any], idx: int) -> Any:
    # positional: missing or null entries count as unanswered
    if idx < len(answers) and answers[idx] is not None:
        return answers[idx]
    return NO_ANSWER


def _field(question: Any, name: str) -> Any:
    if isinstance(question, dict):
        return question.get(name)
    return getattr(question, name, None)


def build_prompt(questions: Sequence[Any], answers: Sequence[Any]) -> str:
    items = []
    for idx, q in enumerate(questions):
        items.append(
            f"Câu {idx + 1}:\n"
            f"- Câu hỏi: {_field(q, 'question')}\n"
            f"- Đáp án đúng: {_field(q, 'correctAnswer')}\n"
            f"- Đáp án user chọn: {resolve_answer(answers, idx)}"
        )
    return PROMPT_TEMPLATE.format(items="\n\n".join(items))


def is_overloaded(err: BaseException) -> bool:
    """True when the backend signalled temporary capacity exhaustion."""
    if isinstance(err, genai_errors.APIError):
        return err.code == 503 or err.status == "UNAVAILABLE"
    status = getattr(err, "status", None)
    if status is None:
        status = getattr(err, "code", None)
    return status in (503, "UNAVAILABLE")


class FeedbackGenerator:

    def __init__(
        self,
        backend: TextBackend,
        max_attempts: int = MAX_ATTEMPTS,
        base_delay: float = BASE_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.backend = backend
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.sleep = sleep

    async def generate_feedback(self, questions: Sequence[Any], answers: Sequence[Any]) -> dict:
        prompt = build_prompt(questions, answers)
        text = await self._generate_with_retry(prompt)
        return {"feedback": text}

    async def _generate_with_retry(self, prompt: str) -> str:
        for attempt in range(self.max_attempts):
            try:
                return await self.backend.generate(prompt)
            except Exception as err:
                if not is_overloaded(err):
                    raise
                if attempt == self.max_attempts - 1:
                    raise UpstreamOverloaded(err) from err
                delay = self.base_delay * (attempt + 1)
                logger.warning(
                    "Feedback backend overloaded (attempt %d/%d), retrying in %.1fs",
                    attempt + 1, self.max_attempts, delay,
                )
                await self.sleep(delay)
        raise UpstreamOverloaded()


def build_feedback_generator(api_key: str | None, model: str) -> FeedbackGenerator | None:
    if not api_key:
        return None
    return FeedbackGenerator(GeminiBackend(api_key=api_key, model=model))
