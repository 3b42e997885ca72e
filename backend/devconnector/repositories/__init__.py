"""
DevConnector Backend — Repositories
=====================================

What:  The narrow persistence interface the services depend on.
How:   Each repository wraps the request's AsyncSession. Lookups by id accept
       raw path strings and return None for malformed ids. Database failures
       surface as DatabaseError.
Who:   Built per request in `dependencies.py`; replaced by AsyncMocks in
       service unit tests.
"""

from devconnector.repositories.posts import PostRepository
from devconnector.repositories.profiles import ProfileRepository
from devconnector.repositories.users import UserRepository

__all__ = ["UserRepository", "PostRepository", "ProfileRepository"]
