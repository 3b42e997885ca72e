"""
DevConnector Backend — ORM Models
===================================

Importing this package registers every table on `Base.metadata`
(used by Alembic autogenerate and `database.create_schema`).
"""

from devconnector.models.user import User
from devconnector.models.post import Comment, Like, Post
from devconnector.models.profile import Profile

__all__ = ["User", "Post", "Like", "Comment", "Profile"]
