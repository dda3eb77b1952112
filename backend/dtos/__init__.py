"""
Data Transfer Objects for the lending API.

- request/: pydantic models for incoming payloads (books, borrowers, loans)
- response/: pydantic models returned by the services and routers
- internal/: plain rows handed from the loan store to the analytics service
"""
