"""
Feature modules for the Storefront backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py: Business logic implementation
- repository.py: SQL access (modules that persist data)
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
