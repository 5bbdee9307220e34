"""
Domain model for the Smart Planner.

This module defines the value types shared by the prioritizer, the daily
schedule builder and the productivity analyzer, together with the
structured error codes used when user preferences are invalid.

All types here are plain dataclasses. Tasks arrive already loaded and
validated by the surrounding application; the planning code only reads
them and always returns newly constructed values.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple
import re


# ==================== Error Codes ====================

class ErrorCode(Enum):
    """Error codes for API responses."""
    SUCCESS = "SUCCESS"
    ERR_MISSING_FIELD = "ERR_MISSING_FIELD"
    ERR_INVALID_TIME = "ERR_INVALID_TIME"
    ERR_INVALID_TIME_RANGE = "ERR_INVALID_TIME_RANGE"
    ERR_INVALID_DURATION = "ERR_INVALID_DURATION"
    ERR_EMPTY_TASKS = "ERR_EMPTY_TASKS"
    ERR_INVALID_PREFERENCES = "ERR_INVALID_PREFERENCES"


@dataclass
class PreferenceError:
    """Structured preference error with code and details."""
    code: ErrorCode
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict:
        result = {
            'error_code': self.code.value,
            'message': self.message
        }
        if self.field:
            result['field'] = self.field
        return result


class ConfigurationError(Exception):
    """
    Raised when user preferences cannot be used to build a schedule.

    Carries every problem found so the caller can report them all at once.
    """

    code = ErrorCode.ERR_INVALID_PREFERENCES

    def __init__(self, errors: List[PreferenceError]):
        self.errors = list(errors)
        message = "; ".join(e.message for e in self.errors) or "Invalid preferences"
        super().__init__(message)

    def to_dict(self) -> Dict:
        return {
            'error_code': self.code.value,
            'message': str(self),
            'errors': [e.to_dict() for e in self.errors]
        }


# ==================== Task ====================

class TaskPriority(str, Enum):
    """Ordered priority tag; urgent is the most important."""
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]

    @property
    def is_important(self) -> bool:
        return self in (TaskPriority.URGENT, TaskPriority.HIGH)


PRIORITY_RANK = {
    TaskPriority.URGENT: 0,
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Task:
    """
    A unit of user-tracked work.

    Attributes:
        id: Opaque identifier assigned by the task store
        title: Display title
        priority: Urgency tag
        status: Lifecycle state
        estimated_minutes: Expected duration; None or 0 means unknown
        actual_minutes: Time actually spent, once completed
        due_date: Deadline; None means no deadline pressure
        completed_at: When the task was completed
    """
    id: str
    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    estimated_minutes: Optional[int] = None
    actual_minutes: Optional[int] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    description: str = ""
    tags: Tuple[str, ...] = ()
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @property
    def is_actionable(self) -> bool:
        """Whether the task still needs work (not completed or cancelled)."""
        return self.status not in (TaskStatus.COMPLETED, TaskStatus.CANCELLED)

    @property
    def has_estimate(self) -> bool:
        return bool(self.estimated_minutes and self.estimated_minutes > 0)


# ==================== Preferences ====================

# HH:MM on a 24h clock, hour may omit its leading zero
TIME_PATTERN = re.compile(r'^([01]?[0-9]|2[0-3]):([0-5][0-9])$')

DEFAULT_WORKING_START = "09:00"
DEFAULT_WORKING_END = "18:00"
DEFAULT_FOCUS_TIME = 90
DEFAULT_BREAK_TIME = 15


def parse_clock(value: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    Raises:
        ValueError: if the value is not a valid 24h clock time
    """
    match = TIME_PATTERN.match(value or '')
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_clock(minutes: int) -> str:
    """Convert minutes since midnight to a zero-padded "HH:MM" string."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class WorkingHours:
    start: str = DEFAULT_WORKING_START
    end: str = DEFAULT_WORKING_END


@dataclass(frozen=True)
class UserPreferences:
    """Scheduling preferences for one user."""
    working_hours: WorkingHours = field(default_factory=WorkingHours)
    focus_time: int = DEFAULT_FOCUS_TIME
    break_time: int = DEFAULT_BREAK_TIME


def validate_preferences(preferences: UserPreferences) -> List[PreferenceError]:
    """
    Validate scheduling preferences and return any errors found.

    Checks both clock values, that the working day starts before it ends,
    and that focus and break lengths are positive integers.
    """
    errors = []
    bounds = {}

    for name in ('start', 'end'):
        value = getattr(preferences.working_hours, name)
        try:
            bounds[name] = parse_clock(value)
        except (TypeError, ValueError):
            errors.append(PreferenceError(
                code=ErrorCode.ERR_INVALID_TIME,
                message=f"Working hours {name} must be a valid HH:MM time, got {value!r}",
                field=f'working_hours.{name}'
            ))

    if len(bounds) == 2 and bounds['start'] >= bounds['end']:
        errors.append(PreferenceError(
            code=ErrorCode.ERR_INVALID_TIME_RANGE,
            message="Working hours start must be earlier than end",
            field='working_hours'
        ))

    for name in ('focus_time', 'break_time'):
        value = getattr(preferences, name)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            errors.append(PreferenceError(
                code=ErrorCode.ERR_INVALID_DURATION,
                message=f"{name.replace('_', ' ').capitalize()} must be a positive number of minutes",
                field=name
            ))

    return errors


# ==================== Schedule & Analysis ====================

@dataclass(frozen=True)
class ScheduleSlot:
    """A contiguous span of the working day: one task or a break, never both."""
    start_time: str
    end_time: str
    task: Optional[Task] = None
    is_break: bool = False
    scheduled_start: Optional[datetime] = None
    scheduled_end: Optional[datetime] = None
    reason: str = ""

    def __post_init__(self):
        if self.is_break == (self.task is not None):
            raise ValueError("A slot holds either a task or a break")

    @property
    def duration_minutes(self) -> int:
        return parse_clock(self.end_time) - parse_clock(self.start_time)


@dataclass
class DailySchedule:
    date: date
    slots: List[ScheduleSlot] = field(default_factory=list)
    productivity_score: int = 0
    recommendations: List[str] = field(default_factory=list)
    unscheduled_tasks: List[Task] = field(default_factory=list)

    @property
    def work_minutes(self) -> int:
        return sum(s.duration_minutes for s in self.slots if not s.is_break)

    @property
    def break_minutes(self) -> int:
        return sum(s.duration_minutes for s in self.slots if s.is_break)

    @property
    def scheduled_tasks(self) -> List[Task]:
        return [s.task for s in self.slots if s.task is not None]


@dataclass
class ProductivityAnalysis:
    score: int = 0
    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


# ==================== Productivity Patterns ====================

class EnergyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class ProductivityPattern:
    """Typical energy and focus capacity (0-100) for one hour of the day."""
    hour: int
    energy_level: EnergyLevel
    focus_capacity: int
    task_types: Tuple[TaskPriority, ...]


DEFAULT_PRODUCTIVITY_PATTERNS = (
    ProductivityPattern(9, EnergyLevel.HIGH, 90, (TaskPriority.URGENT, TaskPriority.HIGH)),
    ProductivityPattern(10, EnergyLevel.HIGH, 95, (TaskPriority.URGENT, TaskPriority.HIGH)),
    ProductivityPattern(11, EnergyLevel.HIGH, 85, (TaskPriority.HIGH, TaskPriority.MEDIUM)),
    ProductivityPattern(12, EnergyLevel.MEDIUM, 60, (TaskPriority.MEDIUM, TaskPriority.LOW)),
    ProductivityPattern(13, EnergyLevel.LOW, 40, (TaskPriority.LOW,)),  # lunch
    ProductivityPattern(14, EnergyLevel.MEDIUM, 70, (TaskPriority.MEDIUM,)),
    ProductivityPattern(15, EnergyLevel.MEDIUM, 80, (TaskPriority.MEDIUM, TaskPriority.HIGH)),
    ProductivityPattern(16, EnergyLevel.MEDIUM, 75, (TaskPriority.MEDIUM,)),
    ProductivityPattern(17, EnergyLevel.LOW, 50, (TaskPriority.LOW, TaskPriority.MEDIUM)),
)
