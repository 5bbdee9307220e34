"""
Productivity analysis for the Smart Planner.

Turns a list of completed tasks into a 0-100 score plus human-readable
insights and recommendations.

Scoring Formula:
---------------
score = min(completed_count * 12, 60) + min(priority_points, 40)

priority_points sums a weight per completed task (urgent 10, high 6,
medium 2, low 1). Adding a completed task never lowers the score, and
raises it until the score saturates at 100.
"""

from collections import Counter
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence

from .domain import (
    DEFAULT_PRODUCTIVITY_PATTERNS,
    EnergyLevel,
    ProductivityAnalysis,
    ProductivityPattern,
    Task,
    TaskPriority,
)


NO_TASKS_INSIGHT = "📊 No tasks have been completed yet today"
NO_TASKS_RECOMMENDATION = "🎯 Start with the easiest task to build momentum"

PRIORITY_POINTS = {
    TaskPriority.URGENT: 10,
    TaskPriority.HIGH: 6,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


def pattern_for_hour(
    hour: int,
    patterns: Sequence[ProductivityPattern] = DEFAULT_PRODUCTIVITY_PATTERNS
) -> Optional[ProductivityPattern]:
    """Return the productivity pattern for an hour, or None outside working hours."""
    for pattern in patterns:
        if pattern.hour == hour:
            return pattern
    return None


def energy_context(moment: Optional[datetime] = None) -> Dict:
    """
    Describe the expected energy level at a point in time.

    Returns:
        dict with hour, energy_level, focus_capacity, suggested_priorities
        and message
    """
    if moment is None:
        moment = datetime.now()

    pattern = pattern_for_hour(moment.hour)
    if pattern is None:
        return {
            'hour': moment.hour,
            'energy_level': None,
            'focus_capacity': 0,
            'suggested_priorities': [],
            'message': 'Outside your usual productive hours - rest or plan tomorrow.'
        }

    messages = {
        EnergyLevel.HIGH: 'Peak productivity - ideal time for complex, important tasks!',
        EnergyLevel.MEDIUM: 'Good time for tasks of medium complexity.',
        EnergyLevel.LOW: 'Energy is low - pick simple tasks or take a break.',
    }
    return {
        'hour': pattern.hour,
        'energy_level': pattern.energy_level.value,
        'focus_capacity': pattern.focus_capacity,
        'suggested_priorities': [p.value for p in pattern.task_types],
        'message': messages[pattern.energy_level]
    }


class ProductivityAnalyzer:
    """Scores completed work and produces insights and recommendations."""

    COUNT_POINTS = 12
    MAX_COUNT_POINTS = 60
    MAX_PRIORITY_POINTS = 40

    # Actual/estimated ratios outside this band trigger estimate advice
    OVERRUN_RATIO = 1.2
    UNDERRUN_RATIO = 0.8

    def calculate_score(self, tasks: Sequence[Task]) -> int:
        if not tasks:
            return 0
        count_points = min(len(tasks) * self.COUNT_POINTS, self.MAX_COUNT_POINTS)
        priority_points = min(
            sum(PRIORITY_POINTS[t.priority] for t in tasks),
            self.MAX_PRIORITY_POINTS
        )
        return max(0, min(count_points + priority_points, 100))

    def estimate_ratio(self, tasks: Sequence[Task]) -> Optional[float]:
        """Total actual minutes over total estimated minutes, where both are known."""
        tracked = [t for t in tasks if t.has_estimate and t.actual_minutes]
        if not tracked:
            return None
        actual = sum(t.actual_minutes for t in tracked)
        estimated = sum(t.estimated_minutes for t in tracked)
        return actual / estimated

    def analyze(
        self,
        completed_tasks: Iterable[Task],
        day: Optional[date] = None,
        current_time: Optional[datetime] = None
    ) -> ProductivityAnalysis:
        """
        Analyze completed work.

        Args:
            completed_tasks: Tasks the user has completed
            day: Only count tasks completed on this date
            current_time: Adds time-of-day recommendations when given

        Returns:
            ProductivityAnalysis with score, insights and recommendations
        """
        tasks = list(completed_tasks)
        if day is not None:
            tasks = [
                t for t in tasks
                if t.completed_at is not None and t.completed_at.date() == day
            ]

        if not tasks:
            return ProductivityAnalysis(
                score=0,
                insights=[NO_TASKS_INSIGHT],
                recommendations=[NO_TASKS_RECOMMENDATION]
            )

        insights = self._insights(tasks)
        recommendations = self._recommendations(tasks, current_time)

        return ProductivityAnalysis(
            score=self.calculate_score(tasks),
            insights=insights,
            recommendations=recommendations
        )

    def _insights(self, tasks: List[Task]) -> List[str]:
        insights = [f"✅ Completed {len(tasks)} task(s)"]

        counts = Counter(t.priority for t in tasks)
        if counts[TaskPriority.URGENT]:
            insights.append(f"🔥 Great job! {counts[TaskPriority.URGENT]} urgent task(s) done")
        if counts[TaskPriority.HIGH]:
            insights.append(f"⚡ {counts[TaskPriority.HIGH]} high-priority task(s) done")

        # Ties go to the more important priority
        dominant = min(counts, key=lambda p: (-counts[p], p.rank))
        insights.append(f"🏷️ Most of your completed work was {dominant.value} priority")

        ratio = self.estimate_ratio(tasks)
        if ratio is not None:
            insights.append(f"⏱️ Tasks took {ratio:.0%} of their estimated time on average")

        return insights

    def _recommendations(
        self,
        tasks: List[Task],
        current_time: Optional[datetime]
    ) -> List[str]:
        recommendations = []

        ratio = self.estimate_ratio(tasks)
        if ratio is not None and ratio > self.OVERRUN_RATIO:
            recommendations.append(
                f"📏 Work ran {ratio - 1:.0%} over estimate - pad new estimates accordingly"
            )
        elif ratio is not None and ratio < self.UNDERRUN_RATIO:
            recommendations.append(
                "🎯 You finish faster than estimated - tighten your estimates"
            )

        if not any(t.priority.is_important for t in tasks):
            recommendations.append(
                "🚀 Tackle an urgent or high-priority task next for a bigger impact"
            )

        if current_time is not None:
            recommendations.extend(self._time_of_day_recommendations(current_time))

        if not recommendations:
            recommendations.append("💪 Keep the momentum going with your next priority task")

        return recommendations

    def _time_of_day_recommendations(self, current_time: datetime) -> List[str]:
        recommendations = []
        hour = current_time.hour

        pattern = pattern_for_hour(hour)
        if pattern is not None:
            if pattern.energy_level == EnergyLevel.HIGH:
                recommendations.append("🚀 Peak productivity right now - ideal for complex tasks!")
            elif pattern.energy_level == EnergyLevel.LOW:
                recommendations.append("😴 Energy is low - do simple tasks or take a break")
            else:
                recommendations.append("⚡ Good time for tasks of medium complexity")

        if 9 <= hour <= 11:
            recommendations.append("🌅 Morning hours are best for creative work")
        elif 14 <= hour <= 16:
            recommendations.append("☀️ Afternoon is good for meetings and communication")
        elif hour >= 17:
            recommendations.append("🌆 Evening - time to plan tomorrow")

        return recommendations


def analyze(
    completed_tasks: Iterable[Task],
    day: Optional[date] = None,
    current_time: Optional[datetime] = None
) -> ProductivityAnalysis:
    """Analyze completed tasks with the default analyzer."""
    return ProductivityAnalyzer().analyze(completed_tasks, day=day, current_time=current_time)
