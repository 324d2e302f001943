from __future__ import annotations

import atexit
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler

from ..app_logger import get_logger
from ..assignments.repository import AssignmentRepository
from ..core.constants import DEFAULT_STATUS_RESET_INTERVAL_SECONDS
from ..core.enums import Weekday
from ..enrollments.repository import EnrollmentRepository

logger = get_logger("scheduling.status_reset")


class CourseStatusResetJob:
    """Return enrollments to ``active`` once today's class has ended."""

    def __init__(self, assignments: AssignmentRepository, enrollments: EnrollmentRepository):
        self._assignments = assignments
        self._enrollments = enrollments

    def run_once(self, now: datetime | None = None) -> int:
        now = now or datetime.now()
        try:
            weekday = Weekday(now.strftime("%A"))
        except ValueError:
            # no classes on Sunday
            return 0

        reset = 0
        for assignment in self._assignments.list_scheduled_on(weekday):
            if not assignment.schedule.has_ended(now):
                continue
            try:
                count = self._enrollments.reset_status_for_assignment(assignment.assignment_id)
            except Exception:
                logger.exception("Status reset failed for assignment %s", assignment.assignment_id)
                continue
            if count:
                logger.info("Reset %s enrollments of assignment %s to active", count, assignment.assignment_id)
            reset += count
        return reset


def start_status_reset_scheduler(
    job: CourseStatusResetJob,
    interval_seconds: int = DEFAULT_STATUS_RESET_INTERVAL_SECONDS,
) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        func=job.run_once,
        trigger="interval",
        seconds=int(interval_seconds),
        id="course_status_reset",
        name="Reset enrollment status after class",
        replace_existing=True,
        next_run_time=datetime.now(),
    )
    scheduler.start()
    logger.info("Course status reset scheduler started (every %ss)", interval_seconds)

    atexit.register(lambda: scheduler.shutdown(wait=False))
    return scheduler
