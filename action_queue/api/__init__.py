"""
API layer - FastAPI surface over the action queue.

IMPORT RULES:
- CAN import from: application, domain, infrastructure (observability only)
- Routes depend on services through api.dependencies
"""
