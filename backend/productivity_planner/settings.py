"""
Django settings for productivity_planner project.

Environment variables:
    DJANGO_SECRET_KEY: Secret key (required outside of DEBUG)
    DJANGO_DEBUG: "1"/"true" to enable debug mode
    DJANGO_ALLOWED_HOSTS: Comma-separated host names
    PLANNER_LOG_LEVEL: Log level for the planning app (default INFO)
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

DEBUG = os.environ.get('DJANGO_DEBUG', 'false').lower() in ('1', 'true', 'yes')

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'insecure-dev-key-change-me')

ALLOWED_HOSTS = [
    h.strip()
    for h in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')
    if h.strip()
]

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'drf_spectacular',
    'planning',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'productivity_planner.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

# The planner keeps no state of its own; the database only backs Django's
# contrib apps and the test runner.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ============================================
# REST FRAMEWORK
# ============================================

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Smart Planner API',
    'DESCRIPTION': 'Task prioritization, daily scheduling and productivity analysis',
    'VERSION': '1.0.0',
}

# ============================================
# PLANNER DEFAULTS
# ============================================

PLANNER = {
    'WORKING_HOURS': {'start': '09:00', 'end': '18:00'},
    'FOCUS_TIME': 90,
    'BREAK_TIME': 15,
    'SHORT_TASK_MINUTES': 30,
}

# ============================================
# LOGGING
# ============================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'planning': {
            'handlers': ['console'],
            'level': os.environ.get('PLANNER_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
