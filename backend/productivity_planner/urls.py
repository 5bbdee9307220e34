"""
URL configuration for productivity_planner project.
"""

from django.urls import path, include
from django.http import JsonResponse
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView


def home_view(request):
    """Root endpoint with API information."""
    return JsonResponse({
        'message': 'Welcome to Smart Planner API',
        'version': '1.0.0',
        'endpoints': {
            'API Root': '/api/',
            'Prioritize Tasks': 'POST /api/tasks/prioritize/',
            'Daily Schedule': 'POST /api/schedule/daily/',
            'Analyze Productivity': 'POST /api/productivity/analyze/',
            'API Documentation': '/api/docs/',
            'OpenAPI Schema': '/api/schema/',
        }
    })


urlpatterns = [
    path('', home_view, name='home'),
    path('api/', include('planning.urls')),
    # OpenAPI/Swagger Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
