"""HTTP exam source — implements ExamSource.

Reads the exam list from the document store's JSON endpoint
(``GET /api/exams`` on the portal server).
"""

from __future__ import annotations

import logging

import httpx

from src.data.models import Exam
from src.ports.exam_source import ExamSourceError

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 10


class HttpExamSource:
    """HTTP implementation of ExamSource."""

    def __init__(self, url: str, timeout: float = _TIMEOUT_SECONDS) -> None:
        self._url = url
        self._timeout = timeout

    async def list_exams(self) -> list[Exam]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(self._url)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ExamSourceError(f"Failed to fetch exams from {self._url}: {exc}") from exc

        if not isinstance(data, list):
            raise ExamSourceError(f"Expected a JSON list of exams, got {type(data).__name__}")

        exams: list[Exam] = []
        for item in data:
            if not isinstance(item, dict) or not item.get("subject") or not item.get("date"):
                logger.warning("Skipping malformed exam entry: %r", item)
                continue
            exams.append(Exam(subject=str(item["subject"]), date=str(item["date"])))
        return exams
