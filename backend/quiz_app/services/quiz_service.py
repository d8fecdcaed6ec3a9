from typing import Any, List, Sequence

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundError
from ..models.quiz_set_model import QuizSet
from ..models.question_model import Question

DEFAULT_TITLE = "Imported Quiz"


def _is_valid_entry(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    question = entry.get("question")
    correct = entry.get("correctAnswer")
    return (
        isinstance(question, str) and bool(question)
        and isinstance(correct, str) and bool(correct)
        and isinstance(entry.get("wrongAnswers"), list)
    )


def _quiz_set_to_read_dict(quiz_set: QuizSet) -> dict:
    return {
        "id": quiz_set.id,
        "title": quiz_set.title,
        "created_at": quiz_set.created_at,
    }


def _question_to_read_dict(q: Question) -> dict:
    return {
        "id": q.id,
        "question": q.question,
        "correctAnswer": q.correct_answer,
        "wrongAnswers": q.wrong_answers if q.wrong_answers is not None else [],
    }


async def import_quiz_set(
    session: AsyncSession,
    user_id: int,
    title: str | None,
    entries: Sequence[Any],
) -> dict:
    """Create a quiz set and its questions in one transaction.

    Malformed entries are skipped and counted; any database failure rolls
    back the quiz set together with every inserted question.
    """
    imported = 0
    skipped = 0
    async with session.begin():
        quiz_set = QuizSet(user_id=user_id, title=title or DEFAULT_TITLE)
        session.add(quiz_set)
        await session.flush()

        for entry in entries:
            if not _is_valid_entry(entry):
                skipped += 1
                continue
            session.add(Question(
                quiz_set_id=quiz_set.id,
                question=entry["question"],
                correct_answer=entry["correctAnswer"],
                wrong_answers=list(entry["wrongAnswers"]),
            ))
            imported += 1

    await session.refresh(quiz_set)
    return {
        "quizSet": _quiz_set_to_read_dict(quiz_set),
        "imported": imported,
        "skipped": skipped,
    }


async def list_quiz_sets(session: AsyncSession, user_id: int) -> List[dict]:
    # newest first; id breaks ties within the same timestamp
    stmt = (
        select(QuizSet)
        .where(QuizSet.user_id == user_id)
        .order_by(QuizSet.created_at.desc(), QuizSet.id.desc())
    )
    res = await session.execute(stmt)
    return [_quiz_set_to_read_dict(qs) for qs in res.scalars().all()]


async def get_quiz_set(session: AsyncSession, quiz_set_id: int) -> dict:
    res = await session.execute(select(QuizSet).where(QuizSet.id == quiz_set_id))
    quiz_set = res.scalar_one_or_none()
    if not quiz_set:
        raise NotFoundError("Quiz set not found")
    return _quiz_set_to_read_dict(quiz_set)


async def list_questions(session: AsyncSession, quiz_set_id: int) -> List[dict]:
    stmt = select(Question).where(Question.quiz_set_id == quiz_set_id).order_by(Question.id)
    res = await session.execute(stmt)
    return [_question_to_read_dict(q) for q in res.scalars().all()]


async def rename_quiz_set(session: AsyncSession, quiz_set_id: int, title: str) -> int:
    res = await session.execute(
        update(QuizSet).where(QuizSet.id == quiz_set_id).values(title=title)
    )
    await session.commit()
    return res.rowcount


async def delete_quiz_set(session: AsyncSession, quiz_set_id: int) -> int:
    async with session.begin():
        # children first so the cascade does not depend on FK enforcement
        await session.execute(delete(Question).where(Question.quiz_set_id == quiz_set_id))
        res = await session.execute(delete(QuizSet).where(QuizSet.id == quiz_set_id))
    return res.rowcount


async def update_question(
    session: AsyncSession,
    question_id: int,
    question: str,
    correct_answer: str,
    wrong_answers: list,
) -> int:
    res = await session.execute(
        update(Question)
        .where(Question.id == question_id)
        .values(question=question, correct_answer=correct_answer, wrong_answers=list(wrong_answers))
    )
    await session.commit()
    return res.rowcount


async def delete_question(session: AsyncSession, question_id: int) -> int:
    res = await session.execute(delete(Question).where(Question.id == question_id))
    await session.commit()
    return res.rowcount
