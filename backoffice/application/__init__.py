"""
Application Layer
=================

Application services and use cases.
This layer orchestrates domain models and repositories.

Contains:
- Use Cases: Business operations (add bank account, approve KYC, reply to ticket, etc.)
- Services: Application services that coordinate multiple use cases
- DTO: Pydantic request/response models
"""
