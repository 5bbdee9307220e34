"""
Daily schedule construction for the Smart Planner.

Packs actionable tasks into the user's working window with a single greedy
forward pass:

- tasks are taken in priority order
- each task gets one block of ``min(estimate or focus_time, focus_time)``
- a break of ``break_time`` follows every block unless it would run past
  the end of the working day
- packing stops at the first task whose block no longer fits

There is no backtracking and no search over alternative packings; the same
input always produces the same schedule.

Scoring Formula:
---------------
productivity_score = round(fill_ratio * 90) + important_work_bonus

where fill_ratio is the share of the working window spent in work slots and
important_work_bonus is 10 when any urgent or high-priority task is
scheduled. The result is clamped to 0-100.
"""

from datetime import date, datetime, time
from typing import Iterable, List, Optional
import logging

from .domain import (
    ConfigurationError,
    DailySchedule,
    ScheduleSlot,
    Task,
    TaskPriority,
    UserPreferences,
    format_clock,
    parse_clock,
    validate_preferences,
)
from .prioritization import TaskPrioritizer


logger = logging.getLogger(__name__)


class DailyScheduleBuilder:
    """
    Builds a DailySchedule from tasks and user preferences.

    Preferences are validated on construction, so an invalid configuration
    fails before any packing starts.
    """

    # Thresholds for recommendations
    FULLY_PACKED_RATIO = 0.85
    IDLE_CAPACITY_RATIO = 0.5
    FRAGMENTED_DAY_BLOCKS = 3

    # Scoring
    FILL_WEIGHT = 90
    IMPORTANT_WORK_BONUS = 10

    def __init__(
        self,
        preferences: UserPreferences,
        prioritizer: Optional[TaskPrioritizer] = None,
        short_task_minutes: int = 30
    ):
        """
        Args:
            preferences: Working hours, focus and break lengths
            prioritizer: Ordering strategy (defaults to TaskPrioritizer)
            short_task_minutes: Blocks shorter than this count as fragments

        Raises:
            ConfigurationError: if the preferences are invalid
        """
        errors = validate_preferences(preferences)
        if errors:
            raise ConfigurationError(errors)

        self.preferences = preferences
        self.prioritizer = prioritizer or TaskPrioritizer()
        self.short_task_minutes = short_task_minutes
        self.day_start = parse_clock(preferences.working_hours.start)
        self.day_end = parse_clock(preferences.working_hours.end)

    @property
    def window_minutes(self) -> int:
        return self.day_end - self.day_start

    def block_length(self, task: Task) -> int:
        """Length of the single block a task receives, capped at one focus unit."""
        focus = self.preferences.focus_time
        if not task.has_estimate:
            return focus
        return min(task.estimated_minutes, focus)

    def build(
        self,
        tasks: Iterable[Task],
        reference_date: Optional[date] = None
    ) -> DailySchedule:
        """
        Build the schedule for one day.

        Args:
            tasks: Candidate tasks; completed and cancelled ones are skipped
            reference_date: Day being planned (defaults to today)

        Returns:
            A DailySchedule with contiguous slots starting at working_hours.start
        """
        if reference_date is None:
            reference_date = date.today()
        elif isinstance(reference_date, datetime):
            reference_date = reference_date.date()

        actionable = [t for t in tasks if t.is_actionable]
        ordered = self.prioritizer.prioritize(actionable)

        slots: List[ScheduleSlot] = []
        cursor = self.day_start
        placed = 0

        for task in ordered:
            if cursor >= self.day_end:
                break

            block = self.block_length(task)
            if self.day_end - cursor < block:
                break

            slots.append(self._slot(reference_date, cursor, cursor + block, task=task))
            cursor += block
            placed += 1

            if cursor + self.preferences.break_time <= self.day_end:
                slots.append(self._slot(
                    reference_date, cursor, cursor + self.preferences.break_time
                ))
                cursor += self.preferences.break_time

        unscheduled = ordered[placed:]
        schedule = DailySchedule(
            date=reference_date,
            slots=slots,
            unscheduled_tasks=unscheduled
        )
        schedule.productivity_score = self.calculate_score(schedule)
        schedule.recommendations = self.generate_recommendations(schedule)

        logger.debug(
            f"Scheduled {placed}/{len(ordered)} tasks for {reference_date.isoformat()}: "
            f"{schedule.work_minutes} work min, score {schedule.productivity_score}"
        )
        return schedule

    def _slot(
        self,
        day: date,
        start: int,
        end: int,
        task: Optional[Task] = None
    ) -> ScheduleSlot:
        return ScheduleSlot(
            start_time=format_clock(start),
            end_time=format_clock(end),
            task=task,
            is_break=task is None,
            scheduled_start=datetime.combine(day, time(start // 60, start % 60)),
            scheduled_end=datetime.combine(day, time(end // 60, end % 60)),
            reason=self._scheduling_reason(task, start, end) if task else ""
        )

    def _scheduling_reason(self, task: Task, start: int, end: int) -> str:
        """Explain in a short phrase why the task landed in this slot."""
        reasons = []

        if task.priority == TaskPriority.URGENT:
            reasons.append("urgent task")
        elif task.priority == TaskPriority.HIGH:
            reasons.append("high priority")

        if task.due_date is not None:
            reasons.append(f"due {task.due_date.strftime('%Y-%m-%d')}")

        if 9 * 60 <= start < 11 * 60:
            reasons.append("morning productivity peak")

        if task.has_estimate and task.estimated_minutes <= self.short_task_minutes:
            reasons.append("quick win for momentum")

        if task.has_estimate and task.estimated_minutes > end - start:
            reasons.append(f"first {end - start} of {task.estimated_minutes} min")

        if not reasons:
            reasons.append("next in priority order")

        return "Scheduled: " + ", ".join(reasons)

    def calculate_score(self, schedule: DailySchedule) -> int:
        """
        Score how productively the working window is used (0-100).

        Monotonic in the share of the window filled with work; breaks and
        idle time do not count.
        """
        if not schedule.slots:
            return 0

        fill_ratio = schedule.work_minutes / self.window_minutes
        score = round(fill_ratio * self.FILL_WEIGHT)

        if any(t.priority.is_important for t in schedule.scheduled_tasks):
            score += self.IMPORTANT_WORK_BONUS

        return max(0, min(score, 100))

    def generate_recommendations(self, schedule: DailySchedule) -> List[str]:
        """Build advisory messages from simple thresholds on the schedule."""
        if not schedule.slots and not schedule.unscheduled_tasks:
            return ["📝 No actionable tasks to schedule - add a task to plan your day"]

        recommendations = []
        fill_ratio = schedule.work_minutes / self.window_minutes
        scheduled = schedule.scheduled_tasks

        if scheduled and scheduled[0].priority == TaskPriority.URGENT:
            recommendations.append(
                f"🔥 Start with \"{scheduled[0].title}\" at {schedule.slots[0].start_time} - "
                "urgent work goes first"
            )

        if fill_ratio >= self.FULLY_PACKED_RATIO:
            recommendations.append("📅 Your schedule is fully packed - protect your breaks")
        elif fill_ratio < self.IDLE_CAPACITY_RATIO:
            idle = self.window_minutes - schedule.work_minutes - schedule.break_minutes
            recommendations.append(
                f"🕒 You have idle capacity remaining ({idle} min) - "
                "consider adding tasks or estimating existing ones"
            )

        if schedule.unscheduled_tasks:
            count = len(schedule.unscheduled_tasks)
            recommendations.append(
                f"⏭️ {count} task(s) did not fit into today's working hours - "
                "move them to tomorrow"
            )

        short_blocks = sum(
            1 for s in schedule.slots
            if not s.is_break and s.duration_minutes < self.short_task_minutes
        )
        if short_blocks >= self.FRAGMENTED_DAY_BLOCKS:
            recommendations.append(
                f"🧩 Too many short tasks fragment the day ({short_blocks} blocks under "
                f"{self.short_task_minutes} min) - batch them into one focus block"
            )

        capped = [
            t for t in scheduled
            if t.has_estimate and t.estimated_minutes > self.preferences.focus_time
        ]
        if capped:
            recommendations.append(
                f"✂️ {len(capped)} task(s) need more than one {self.preferences.focus_time} min "
                "focus block - only the first block is scheduled today"
            )

        return recommendations


def build_schedule(
    tasks: Iterable[Task],
    preferences: UserPreferences,
    reference_date: Optional[date] = None
) -> DailySchedule:
    """Build a daily schedule with the default prioritizer."""
    return DailyScheduleBuilder(preferences).build(tasks, reference_date)
