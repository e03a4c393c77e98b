"""
Core package of the AI Media Studio engine: prompt templates, request
orchestration, image batching and the HTTP application.

Import ``core.app_state`` to get the FastAPI application with routes attached.
"""
