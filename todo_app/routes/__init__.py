"""
Routes package for the task store application.

This package contains route blueprints:
- api: REST API endpoints consumed by the task list client
"""
