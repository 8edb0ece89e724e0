"""
User API Contract Testing Suite

Lightweight contract verification of the remote User resource:
CRUD, pagination boundaries and uniqueness enforcement, with guaranteed
cleanup of every user created during a run.
"""

__version__ = "1.0.0"
