"""
Planner configuration.

Defaults are read from ``settings.PLANNER`` and fall back to the built-in
values below for any key the project does not set.
"""

from django.conf import settings

from .domain import (
    DEFAULT_BREAK_TIME,
    DEFAULT_FOCUS_TIME,
    DEFAULT_WORKING_END,
    DEFAULT_WORKING_START,
    UserPreferences,
    WorkingHours,
)


DEFAULTS = {
    'WORKING_HOURS': {'start': DEFAULT_WORKING_START, 'end': DEFAULT_WORKING_END},
    'FOCUS_TIME': DEFAULT_FOCUS_TIME,
    'BREAK_TIME': DEFAULT_BREAK_TIME,
    'SHORT_TASK_MINUTES': 30,
}


def planner_setting(name: str):
    """Return a planner setting, falling back to the built-in default."""
    overrides = getattr(settings, 'PLANNER', {}) or {}
    return overrides.get(name, DEFAULTS[name])


def default_preferences() -> UserPreferences:
    hours = {**DEFAULTS['WORKING_HOURS'], **planner_setting('WORKING_HOURS')}
    return UserPreferences(
        working_hours=WorkingHours(start=hours['start'], end=hours['end']),
        focus_time=planner_setting('FOCUS_TIME'),
        break_time=planner_setting('BREAK_TIME')
    )
