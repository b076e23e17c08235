"""
Integration test package for the task list manager.

Tests use the Flask test client and demonstrate:
- CRUD operation testing
- Input validation testing
- Error handling testing
- Client cache synchronisation with the store
"""
