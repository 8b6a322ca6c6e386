"""Exam source port — read-only view of the exam list kept by the document store."""

from __future__ import annotations

from typing import Protocol

from src.data.models import Exam


class ExamSourceError(Exception):
    """Raised when the exam list cannot be fetched or understood."""


class ExamSource(Protocol):
    """Abstract exam listing used by the exam reminder loop."""

    async def list_exams(self) -> list[Exam]: ...
