"""
Application layer - Queue orchestration for the action queue.

This layer contains:
- Port definitions (abstract interfaces for infrastructure)
- Aggregator, controller, dispatcher and deep-link services

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, api
"""
