"""
Tests for the authentication app.

Modules:
- test_managers.py: UserManager tests
- test_models.py: User model tests
- test_services.py: UserDirectoryService tests
"""
