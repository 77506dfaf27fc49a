"""tasktrack — multi-tenant project and task tracker.

Users own projects, projects own tasks, and every read or write is scoped
to the caller's own data. Authentication is cookie-based JWT (short-lived
access token + long-lived refresh token).
"""

__version__ = "0.1.0"
