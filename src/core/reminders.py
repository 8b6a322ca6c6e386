"""
Student Portal Core — Reminder Scheduler.

Study reminders: every STUDY_CHECK_INTERVAL_SECONDS, each unfinished study
session is checked for two trigger instants, a few minutes before it starts
and a few minutes before it ends. A trigger fires when it falls inside the
window (previous tick, this tick], so every trigger fires exactly once no
matter how the ticks line up with it.

Exam reminders: every EXAM_CHECK_INTERVAL_HOURS, exams dated tomorrow are
announced to every known user, at most once per exam.

Ticks are driven by the Telegram job queue (see src.bot.telegram_bot); this
module holds the logic and the little state the loops need.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Callable

from src.core.broadcasts import DEFAULT_TIMEOUT_SECONDS, broadcast, deliver

if TYPE_CHECKING:
    from src.core.identity import IdentityDirectory
    from src.data.models import Exam, StudySession
    from src.ports.exam_source import ExamSource
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

START = "start"
END = "end"


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def is_due(trigger: datetime, last_tick: datetime, now: datetime) -> bool:
    """True iff ``trigger`` lies in the half-open window (last_tick, now]."""
    return last_tick < trigger <= now


def local_day(raw: str) -> date:
    """Calendar day, in the process-local zone, of an ISO date or datetime.

    Offset-aware datetimes (including a trailing "Z") are converted to local
    time first; plain dates and naive datetimes are taken as they are.
    """
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    if len(text) == 10:
        return date.fromisoformat(text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def _session_instant(day: str, clock_time: str) -> datetime:
    clock = datetime.strptime(clock_time.strip(), "%H:%M").time()
    return datetime.combine(local_day(day), clock)


def session_triggers(
    session: StudySession, lead: timedelta,
) -> list[tuple[str, datetime]]:
    """Return the (kind, instant) reminder triggers for a session.

    Raises ValueError on a malformed date or time.
    """
    start = _session_instant(session.date, session.start_time)
    end = _session_instant(session.date, session.end_time)
    return [(START, start - lead), (END, end - lead)]


def parse_exam_date(raw: str) -> date:
    """Local calendar day of an exam given as an ISO date or datetime string."""
    return local_day(raw)


def format_study_reminder(session: StudySession, kind: str, lead_minutes: int) -> str:
    verb = "سيبدأ" if kind == START else "سينتهي"
    return (
        f"⏰ تذكير: {verb} وقت مذاكرة {session.subject} خلال {lead_minutes} دقائق!\n"
        f"📖 الموضوع: {session.topic}"
    )


def format_exam_reminder(exam: Exam) -> str:
    return (
        f"🚨 تذكير: اختبار {exam.subject} سيكون غداً!\n"
        f"📅 التاريخ: {exam.date}\n\n"
        "حظاً موفقاً! 💪"
    )


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------


class ReminderScheduler:
    """State and tick bodies for the study and exam reminder loops."""

    def __init__(
        self,
        directory: IdentityDirectory,
        notifier: NotificationPort,
        exam_source: ExamSource | None = None,
        *,
        study_interval: timedelta = timedelta(seconds=30),
        lead: timedelta = timedelta(minutes=5),
        send_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._directory = directory
        self._notifier = notifier
        self._exam_source = exam_source
        self._study_interval = study_interval
        self._lead = lead
        self._send_timeout = send_timeout
        self._clock = clock
        self._last_study_tick: datetime | None = None
        self._exams_notified: dict[tuple[str, date], date] = {}

    @property
    def lead_minutes(self) -> int:
        return int(self._lead.total_seconds() // 60)

    # -- study loop ---------------------------------------------------------

    async def run_study_tick(self, now: datetime | None = None) -> int:
        """Send every study reminder that fell due since the previous tick.

        The first tick looks back one interval. Returns the number of
        reminders delivered.
        """
        now = now or self._clock()
        window_start = self._last_study_tick or now - self._study_interval
        if now <= window_start:
            logger.warning("Study tick at %s is not after %s; skipping", now, window_start)
            return 0
        self._last_study_tick = now

        due: list[tuple[int, str]] = []
        for user in self._directory.list_users():
            for session in list(user.study_sessions):
                if session.completed:
                    continue
                try:
                    triggers = session_triggers(session, self._lead)
                except (ValueError, TypeError, AttributeError) as exc:
                    logger.warning(
                        "Skipping malformed session %r of user %d: %s",
                        getattr(session, "id", None), user.platform_id, exc,
                    )
                    continue
                for kind, trigger in triggers:
                    if is_due(trigger, window_start, now):
                        text = format_study_reminder(session, kind, self.lead_minutes)
                        due.append((user.platform_id, text))

        sent = 0
        for recipient, text in due:
            if await deliver(self._notifier, recipient, text, self._send_timeout):
                sent += 1
        if due:
            logger.info("Study tick: %d/%d reminders delivered", sent, len(due))
        return sent

    # -- exam loop ----------------------------------------------------------

    async def run_exam_tick(self, today: date | None = None) -> int:
        """Announce tomorrow's exams to every known user, once per exam.

        Returns the number of messages delivered.
        """
        if self._exam_source is None:
            return 0

        today = today or self._clock().date()
        tomorrow = today + timedelta(days=1)
        self._forget_past_exams(today)

        try:
            exams = await self._exam_source.list_exams()
        except Exception as exc:
            logger.error("Error checking exam reminders: %s", exc)
            return 0

        recipients = [user.platform_id for user in self._directory.list_users()]
        sent = 0
        for exam in exams:
            try:
                exam_day = parse_exam_date(exam.date)
            except (ValueError, AttributeError) as exc:
                logger.warning("Skipping exam %r with bad date: %s", exam.subject, exc)
                continue
            if exam_day != tomorrow:
                continue

            key = (exam.subject, exam_day)
            if key in self._exams_notified:
                logger.debug("Exam %s on %s already announced", exam.subject, exam_day)
                continue
            self._exams_notified[key] = today

            delivered = await broadcast(
                self._notifier, recipients, format_exam_reminder(exam), self._send_timeout,
            )
            logger.info(
                "Exam reminder for %s sent to %d/%d users",
                exam.subject, delivered, len(recipients),
            )
            sent += delivered
        return sent

    def _forget_past_exams(self, today: date) -> None:
        for key in [k for k in self._exams_notified if k[1] < today]:
            del self._exams_notified[key]
