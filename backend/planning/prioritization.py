"""
Task prioritization for the Smart Planner.

Orders tasks by urgency using three keys applied lexicographically:

1. Priority rank (urgent > high > medium > low)
2. Due date (tasks with a deadline first, earliest deadline first)
3. Estimated minutes (shortest first, unknown estimates last)

The sort is stable, so tasks that tie on every key keep their input order.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Tuple

from .domain import Task


def _comparable(moment: datetime) -> datetime:
    # Naive deadlines are read as UTC so they order against aware ones
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class TaskPrioritizer:
    """
    Deterministic multi-key prioritizer.

    Subclasses can override ``sort_key`` to provide a different ordering
    strategy; the schedule builder only relies on ``prioritize``.
    """

    def sort_key(self, task: Task) -> Tuple:
        # (0, value) sorts before (1,), and two (1,) keys tie
        due_key = (0, _comparable(task.due_date)) if task.due_date is not None else (1,)
        effort_key = (0, task.estimated_minutes) if task.has_estimate else (1,)
        return (task.priority.rank, due_key, effort_key)

    def prioritize(self, tasks: Iterable[Task]) -> List[Task]:
        """
        Return a new list with the tasks in priority order.

        Args:
            tasks: Tasks to order; the input is left untouched

        Returns:
            A permutation of the input, most urgent first
        """
        return sorted(tasks, key=self.sort_key)


def prioritize(tasks: Iterable[Task]) -> List[Task]:
    """Order tasks with the default prioritizer."""
    return TaskPrioritizer().prioritize(tasks)
