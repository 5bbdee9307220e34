"""
URL configuration for the planning app.
"""

from django.urls import path
from . import views

urlpatterns = [
    path('', views.api_info, name='api-info'),
    path('tasks/prioritize/', views.prioritize_tasks, name='prioritize-tasks'),
    path('schedule/daily/', views.daily_schedule, name='daily-schedule'),
    path('productivity/analyze/', views.analyze_productivity, name='analyze-productivity'),
    path('productivity/time-context/', views.get_time_context, name='time-context'),
]
