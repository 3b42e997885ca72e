# Routes package init
"""
DevConnector Backend — API Routes Package
===========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource.

Route Inventory:
    - auth.py:     GET  /api/auth                        (current user)
                   POST /api/auth                        (login)
    - users.py:    POST /api/users                       (registration)
    - posts.py:    /api/posts, /api/posts/{id},
                   /api/posts/like|unlike/{id},
                   /api/posts/comment/{id}[/{comment_id}]
    - profile.py:  /api/profile, /api/profile/me, /api/profile/user/{user_id}
    - health.py:   GET  /health

Routes stay thin: resolve the caller (Auth Gate dependency), validate the
body, call one service method, return its result. Errors are raised as
application exceptions and formatted by the handlers in main.py.
"""
