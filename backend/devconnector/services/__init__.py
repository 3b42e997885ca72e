# Services package init
"""
DevConnector Backend — Services Layer
=======================================

What:  Business rules sitting between routes (HTTP) and repositories (persistence).
How:   Services receive repositories and helpers through their constructors and
       raise DevConnectorError subclasses; they never build HTTP responses.

Service Inventory:
    - TokenService:   issue / verify signed, expiring access tokens (PyJWT)
    - PasswordHasher: bcrypt hashing off the event loop (passlib)
    - AuthService:    login, registration, current user lookup
    - PostService:    posts, likes, comments and their ownership rules
    - ProfileService: profile upsert/lookup and account deletion
"""
