"""
Domain Layer
============

Core business rules and domain models.
This layer has no dependencies on external frameworks or infrastructure.

Contains:
- Models: Bank accounts, KYC submissions, support tickets, principals
- Repository Interfaces: Abstract contracts for data access and notification
- Exceptions: Error taxonomy shared by all workflows
"""
