"""
Test suite for the task list manager.

This package contains:
- unit/: Store, model, API client, controller and renderer tests
- integration/: REST API tests and client-against-store tests
"""
