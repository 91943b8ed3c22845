# expense_backend/routers/__init__.py
# Router package initialization

"""
API Routers for the expense backend.

- auth: login and registration
- expenses: per-user expense listing and mutations
- system: bootstrap and health check
"""
