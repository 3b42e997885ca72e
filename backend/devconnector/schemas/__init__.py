"""
DevConnector Backend — Pydantic Request/Response Schemas
==========================================================

What:  The API contract between the frontend and the backend.
How:   Request models validate bodies with the messages the frontend displays;
       response models are built from ORM objects (`from_attributes`) and
       decide exactly which columns leave the server (never `password`).
"""
