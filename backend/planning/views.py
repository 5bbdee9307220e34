"""
API Views for the Smart Planner.

This module exposes task prioritization, daily schedule construction and
productivity analysis as REST endpoints with structured error codes and
rate limiting.
"""

from rest_framework import status
from rest_framework.decorators import api_view, throttle_classes
from rest_framework.response import Response
from rest_framework.request import Request
from rest_framework.throttling import AnonRateThrottle
from drf_spectacular.utils import extend_schema
from drf_spectacular.types import OpenApiTypes
from datetime import datetime
import logging

from .conf import default_preferences, planner_setting
from .domain import ConfigurationError, ErrorCode
from .prioritization import prioritize
from .productivity import analyze, energy_context
from .scheduling import DailyScheduleBuilder
from .serializers import (
    AnalyzeRequestSerializer,
    PrioritizeRequestSerializer,
    ScheduleRequestSerializer,
    analysis_to_dict,
    preferences_from_data,
    schedule_to_dict,
    task_from_data,
    task_to_dict,
)


logger = logging.getLogger(__name__)


# ============================================
# RATE LIMITING CLASSES
# ============================================

class PlanningRateThrottle(AnonRateThrottle):
    """Rate limit for planning endpoints - 30 requests per minute."""
    rate = '30/min'


def _invalid_input(serializer, message: str) -> Response:
    errors = serializer.errors
    error_code = ErrorCode.ERR_MISSING_FIELD
    if 'tasks' in errors and any('At least one task' in str(e) for e in errors['tasks']):
        error_code = ErrorCode.ERR_EMPTY_TASKS
    return Response(
        {
            'success': False,
            'error_code': error_code.value,
            'errors': errors,
            'message': message
        },
        status=status.HTTP_400_BAD_REQUEST
    )


# ============================================
# API ENDPOINTS
# ============================================

@extend_schema(
    summary="Prioritize tasks",
    description="""
    Order tasks by priority, then due date, then estimated duration
    (shortest first). Ties keep their submitted order.
    """,
    request=PrioritizeRequestSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Planning']
)
@api_view(['POST'])
@throttle_classes([PlanningRateThrottle])
def prioritize_tasks(request: Request) -> Response:
    """
    Return the submitted tasks in priority order.

    POST /api/tasks/prioritize/

    Request Body:
    {
        "tasks": [...]
    }
    """
    serializer = PrioritizeRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return _invalid_input(serializer, 'Invalid input data. Please check your tasks format.')

    tasks = [task_from_data(t) for t in serializer.validated_data['tasks']]
    ordered = prioritize(tasks)

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'count': len(ordered),
        'tasks': [task_to_dict(t) for t in ordered]
    })


@extend_schema(
    summary="Build a daily schedule",
    description="""
    Pack actionable tasks into the working day in priority order, with a
    break after every focus block. Omitted preferences use the planner
    defaults.
    """,
    request=ScheduleRequestSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Planning']
)
@api_view(['POST'])
@throttle_classes([PlanningRateThrottle])
def daily_schedule(request: Request) -> Response:
    """
    Build the schedule for one day.

    POST /api/schedule/daily/

    Request Body:
    {
        "tasks": [...],
        "preferences": {                        // Optional
            "working_hours": {"start": "09:00", "end": "18:00"},
            "focus_time": 90,
            "break_time": 15
        },
        "date": "2025-11-03"                    // Optional (default: today)
    }
    """
    serializer = ScheduleRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return _invalid_input(serializer, 'Invalid input data. Please check your tasks and preferences.')

    validated_data = serializer.validated_data
    tasks = [task_from_data(t) for t in validated_data['tasks']]
    preferences = preferences_from_data(
        validated_data.get('preferences'),
        default_preferences()
    )

    try:
        builder = DailyScheduleBuilder(
            preferences,
            short_task_minutes=planner_setting('SHORT_TASK_MINUTES')
        )
    except ConfigurationError as exc:
        logger.warning(f"Rejected scheduling preferences: {exc}")
        return Response(
            {'success': False, **exc.to_dict()},
            status=status.HTTP_400_BAD_REQUEST
        )

    schedule = builder.build(tasks, validated_data.get('date'))

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'schedule': schedule_to_dict(schedule)
    })


@extend_schema(
    summary="Analyze productivity",
    description="Score completed tasks and return insights and recommendations.",
    request=AnalyzeRequestSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Productivity']
)
@api_view(['POST'])
@throttle_classes([PlanningRateThrottle])
def analyze_productivity(request: Request) -> Response:
    """
    Analyze completed work.

    POST /api/productivity/analyze/

    Request Body:
    {
        "completed_tasks": [...],
        "date": "2025-11-03",          // Optional: only count tasks completed that day
        "time_aware": true             // Optional: add time-of-day advice
    }
    """
    serializer = AnalyzeRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return _invalid_input(serializer, 'Invalid input data. Please check your tasks format.')

    validated_data = serializer.validated_data
    tasks = [task_from_data(t) for t in validated_data['completed_tasks']]
    time_aware = request.data.get('time_aware', False)

    analysis = analyze(
        tasks,
        day=validated_data.get('date'),
        current_time=datetime.now() if time_aware else None
    )

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'analysis': analysis_to_dict(analysis)
    })


@extend_schema(
    summary="Get time-based context",
    description="Get the expected energy level for the current hour.",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Productivity']
)
@api_view(['GET'])
def get_time_context(request: Request) -> Response:
    """
    Get time-based work suggestions.

    GET /api/productivity/time-context/
    """
    now = datetime.now()
    return Response({
        'success': True,
        'current_time': now.isoformat(),
        **energy_context(now)
    })


@extend_schema(
    summary="API information",
    description="Get API information and available endpoints.",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Info']
)
@api_view(['GET'])
def api_info(request: Request) -> Response:
    """
    Return API information and available endpoints.

    GET /api/
    """
    return Response({
        'name': 'Smart Planner API',
        'version': '1.0.0',
        'documentation': '/api/docs/',
        'features': [
            'Priority, deadline and effort based task ordering',
            'Greedy daily schedule with focus blocks and breaks',
            'Productivity score with insights and recommendations',
            'Time-of-day energy context',
            'Rate limiting (30 req/min)',
            'OpenAPI/Swagger documentation'
        ],
        'endpoints': {
            'POST /api/tasks/prioritize/': 'Order tasks by priority',
            'POST /api/schedule/daily/': 'Build a daily schedule',
            'POST /api/productivity/analyze/': 'Analyze completed tasks',
            'GET /api/productivity/time-context/': 'Get energy context for now',
            'GET /api/docs/': 'Interactive API documentation',
            'GET /api/schema/': 'OpenAPI schema',
            'GET /api/': 'This info endpoint'
        },
        'defaults': {
            'working_hours': planner_setting('WORKING_HOURS'),
            'focus_time': planner_setting('FOCUS_TIME'),
            'break_time': planner_setting('BREAK_TIME')
        },
        'error_codes': {
            code.value: code.name for code in ErrorCode
        }
    })
