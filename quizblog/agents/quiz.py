# quizblog/agents/quiz.py
import json
import logging
import string
from typing import List, Optional

from pydantic import BaseModel

from ..my_llm import generate

log = logging.getLogger(__name__)

CHOICE_KEYS = ("A", "B", "C", "D")
CORRECT_MSG = "Correct!"
INCORRECT_MSG = "Incorrect. Try again!"


class Choices(BaseModel):
    A: Optional[str] = None
    B: Optional[str] = None
    C: Optional[str] = None
    D: Optional[str] = None


class QuizQuestion(BaseModel):
    question: Optional[str] = None
    choices: Choices = Choices()
    correctAnswer: Optional[str] = None


QUIZ_PROMPT_TPL = string.Template("\n".join([
    "You are a quiz generator. I will provide a paragraph, and you will create one question based on it "
    "along with four multiple-choice answers. Ensure that:",
    "1. The question is relevant to the paragraph's content.",
    "2. One answer is correct, and the other three are plausible distractors.",
    "3. Indicate the correct answer explicitly.",
    "",
    "Here is the paragraph:",
    '"$paragraph"',
    "",
    "Generate:",
    "1. The question.",
    "2. Four answer choices labeled A, B, C, and D.",
    "3. Indicate the correct answer.",
    "",
    "Output your response in this format:",
    "Question: <Your question>",
    "A) <Answer choice A>",
    "B) <Answer choice B>",
    "C) <Answer choice C>",
    "D) <Answer choice D>",
    "Correct Answer: <Correct answer label (A, B, C, or D)>",
]))


def build_prompt(paragraph: str) -> str:
    return QUIZ_PROMPT_TPL.substitute(paragraph=paragraph or "")


def _find_marked(lines: List[str], marker: str) -> Optional[str]:
    """Text after `marker` on the first line that starts with it, trimmed."""
    for line in lines:
        if line.startswith(marker):
            return line[len(marker):].strip()
    return None


def parse_quiz_response(raw: str) -> QuizQuestion:
    """
    Best-effort parse of the line-oriented model output:

        Question: ...
        A) ... / B) ... / C) ... / D) ...
        Correct Answer: B

    Any missing marker leaves that field as None. Nothing is validated:
    the correct-answer key may be outside A-D and choices may be empty.
    """
    lines = [ln.strip() for ln in (raw or "").splitlines()]

    question = _find_marked(lines, "Question:")
    choices = Choices(**{k: _find_marked(lines, f"{k})") for k in CHOICE_KEYS})
    correct = _find_marked(lines, "Correct Answer:")
    correct_key = correct[:1] if correct else None

    return QuizQuestion(question=question, choices=choices, correctAnswer=correct_key)


async def generate_question(client, paragraph: str, max_new_tokens: int = 300) -> QuizQuestion:
    """One model call, no retry. Errors from the client propagate to the caller."""
    prompt = build_prompt(paragraph)
    output = await generate(client, prompt, max_new_tokens=max_new_tokens)
    if isinstance(output, dict):
        output = output.get("text") or output.get("content") or json.dumps(output)
    raw = (output or "").strip()
    log.debug("Raw quiz output (first 200): %s", raw[:200])

    parsed = parse_quiz_response(raw)
    if parsed.question is None or parsed.correctAnswer is None:
        log.warning("Quiz output missing markers; returning partial record")
    return parsed


def evaluate_answer(selected: Optional[str], correct: Optional[str]) -> str:
    return CORRECT_MSG if selected == correct else INCORRECT_MSG
