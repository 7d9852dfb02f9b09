"""
Infrastructure layer - External adapters for the action queue.

This layer contains:
- HTTP adapters for source domains and mutation endpoints (httpx)
- asyncio timer scheduler and system clock
- structlog configuration and correlation IDs
- In-memory stubs for development and testing

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in the application layer
"""
