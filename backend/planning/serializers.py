"""
Serializers for the planning API.

This module validates incoming task and preference data, converts it into
the planner's domain objects, and turns planning results back into
JSON-ready dictionaries.
"""

from typing import Dict, Optional

from rest_framework import ISO_8601, serializers

from .domain import (
    DailySchedule,
    ProductivityAnalysis,
    ScheduleSlot,
    Task,
    TaskPriority,
    TaskStatus,
    UserPreferences,
    WorkingHours,
)


DATETIME_INPUT_FORMATS = [ISO_8601, '%Y-%m-%d']


class TaskInputSerializer(serializers.Serializer):
    """
    Serializer for validating incoming task data.

    Tasks are submitted inline with each request; the planner never loads
    them from storage itself.
    """

    id = serializers.CharField(max_length=64)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    priority = serializers.ChoiceField(
        choices=[p.value for p in TaskPriority],
        default=TaskPriority.MEDIUM.value
    )
    status = serializers.ChoiceField(
        choices=[s.value for s in TaskStatus],
        default=TaskStatus.TODO.value
    )
    estimated_minutes = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    actual_minutes = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    due_date = serializers.DateTimeField(
        input_formats=DATETIME_INPUT_FORMATS,
        required=False,
        allow_null=True
    )
    completed_at = serializers.DateTimeField(
        input_formats=DATETIME_INPUT_FORMATS,
        required=False,
        allow_null=True
    )
    tags = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        default=list
    )

    def validate_title(self, value):
        """Ensure title is not empty or just whitespace."""
        if not value or not value.strip():
            raise serializers.ValidationError("Title cannot be empty")
        return value.strip()


class WorkingHoursSerializer(serializers.Serializer):
    # Format checks happen in validate_preferences so the API and the
    # planner report the same errors
    start = serializers.CharField(max_length=5, required=False)
    end = serializers.CharField(max_length=5, required=False)


class PreferencesSerializer(serializers.Serializer):
    """Scheduling preferences; omitted fields fall back to planner defaults."""

    working_hours = WorkingHoursSerializer(required=False)
    focus_time = serializers.IntegerField(required=False)
    break_time = serializers.IntegerField(required=False)


class PrioritizeRequestSerializer(serializers.Serializer):
    tasks = serializers.ListField(
        child=TaskInputSerializer(),
        min_length=1,
        error_messages={
            'min_length': 'At least one task is required for prioritization'
        }
    )


class ScheduleRequestSerializer(serializers.Serializer):
    tasks = serializers.ListField(child=TaskInputSerializer(), allow_empty=True)
    preferences = PreferencesSerializer(required=False)
    date = serializers.DateField(required=False)


class AnalyzeRequestSerializer(serializers.Serializer):
    completed_tasks = serializers.ListField(child=TaskInputSerializer(), allow_empty=True)
    date = serializers.DateField(required=False)


# ==================== Conversion ====================

def task_from_data(data: Dict) -> Task:
    """Build a Task from validated TaskInputSerializer data."""
    return Task(
        id=data['id'],
        title=data['title'],
        description=data.get('description', ''),
        priority=TaskPriority(data.get('priority', TaskPriority.MEDIUM.value)),
        status=TaskStatus(data.get('status', TaskStatus.TODO.value)),
        estimated_minutes=data.get('estimated_minutes'),
        actual_minutes=data.get('actual_minutes'),
        due_date=data.get('due_date'),
        completed_at=data.get('completed_at'),
        tags=tuple(data.get('tags', ()))
    )


def preferences_from_data(
    data: Optional[Dict],
    defaults: UserPreferences
) -> UserPreferences:
    """Overlay validated preference data on top of the defaults."""
    data = data or {}
    hours = data.get('working_hours') or {}
    return UserPreferences(
        working_hours=WorkingHours(
            start=hours.get('start', defaults.working_hours.start),
            end=hours.get('end', defaults.working_hours.end)
        ),
        focus_time=data.get('focus_time', defaults.focus_time),
        break_time=data.get('break_time', defaults.break_time)
    )


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def task_to_dict(task: Task) -> Dict:
    """Convert a Task to a dictionary for JSON serialization."""
    return {
        'id': task.id,
        'title': task.title,
        'description': task.description,
        'priority': task.priority.value,
        'status': task.status.value,
        'estimated_minutes': task.estimated_minutes,
        'actual_minutes': task.actual_minutes,
        'due_date': _isoformat(task.due_date),
        'completed_at': _isoformat(task.completed_at),
        'tags': list(task.tags)
    }


def slot_to_dict(slot: ScheduleSlot) -> Dict:
    return {
        'start_time': slot.start_time,
        'end_time': slot.end_time,
        'duration_minutes': slot.duration_minutes,
        'is_break': slot.is_break,
        'task': task_to_dict(slot.task) if slot.task else None,
        'scheduled_start': _isoformat(slot.scheduled_start),
        'scheduled_end': _isoformat(slot.scheduled_end),
        'reason': slot.reason
    }


def schedule_to_dict(schedule: DailySchedule) -> Dict:
    return {
        'date': schedule.date.isoformat(),
        'slots': [slot_to_dict(s) for s in schedule.slots],
        'productivity_score': schedule.productivity_score,
        'recommendations': list(schedule.recommendations),
        'unscheduled_tasks': [task_to_dict(t) for t in schedule.unscheduled_tasks],
        'work_minutes': schedule.work_minutes,
        'break_minutes': schedule.break_minutes
    }


def analysis_to_dict(analysis: ProductivityAnalysis) -> Dict:
    return {
        'score': analysis.score,
        'insights': list(analysis.insights),
        'recommendations': list(analysis.recommendations)
    }
