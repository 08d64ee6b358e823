"""
Domain layer: entities, enrollment policy and ports (Protocols).

No imports from infrastructure or FastAPI.
"""
