"""
Application layer - notification pipeline orchestration.

This layer contains:
- Port definitions (registry and push gateway interfaces)
- Application services (target resolution, fan-out, reconciliation, pipeline)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, api
"""
