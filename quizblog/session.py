# quizblog/session.py
import logging
from typing import Awaitable, Callable, Optional

import httpx

from .agents.quiz import QuizQuestion, evaluate_answer, generate_question

log = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[QuizQuestion]]


def direct_fetcher(client, max_new_tokens: int = 300) -> Fetcher:
    """Generate in-process with the shared quiz agent."""
    async def fetch(paragraph: str) -> QuizQuestion:
        return await generate_question(client, paragraph, max_new_tokens=max_new_tokens)
    return fetch


def http_fetcher(api_url: str, timeout: float = 60.0, transport=None) -> Fetcher:
    """POST {"paragraph": ...} to the question endpoint."""
    async def fetch(paragraph: str) -> QuizQuestion:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as http:
            resp = await http.post(api_url, json={"paragraph": paragraph})
            resp.raise_for_status()
            return QuizQuestion.model_validate(resp.json())
    return fetch


class QuizSession:
    """
    State of one quiz modal on one page.

    Only one request may be outstanding. Closing does not cancel it; a
    response that arrives after close is dropped, unless the modal was
    reopened while that request was still in flight, in which case the
    reopened modal takes it over.
    """

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher
        self.is_open = False
        self.is_loading = False
        self.question: Optional[QuizQuestion] = None
        self.selected_answer: Optional[str] = None
        self.result: Optional[str] = None
        self._counter = 0
        self._inflight: Optional[int] = None
        self._current: Optional[int] = None

    async def open(self, paragraph: str) -> Optional[QuizQuestion]:
        self.is_open = True
        if self.is_loading:
            log.debug("Quiz request already in flight; reopened modal waits for it")
            self._current = self._inflight
            return None

        self._counter += 1
        mine = self._counter
        self._inflight = self._current = mine
        self.is_loading = True
        try:
            question = await self.fetcher(paragraph)
        except Exception:
            log.exception("Error fetching question data")
            return None
        finally:
            self.is_loading = False
            self._inflight = None

        if mine != self._current or not self.is_open:
            log.debug("Dropping late quiz response (modal closed)")
            return None
        self.question = question
        return question

    def close(self) -> None:
        self._current = None
        self.is_open = False
        self.question = None
        self.result = None
        self.selected_answer = None

    def select(self, key: str) -> Optional[str]:
        if self.question is None:
            return None
        self.selected_answer = key
        self.result = evaluate_answer(key, self.question.correctAnswer)
        return self.result
