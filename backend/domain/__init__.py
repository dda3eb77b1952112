"""
Domain Layer

Lending domain model, kept free of persistence and transport concerns.

Structure:
- validators.py: pure field checks and the text sanitizer
- value_objects/: categories and the state enums
- entities/: EntityState, the identity/timestamp/event holder
- aggregates/: Book, Borrower and Loan
- events.py: domain event types
- rules.py: business rule predicates
"""
