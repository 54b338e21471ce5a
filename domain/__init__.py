"""
Domain layer - Document models, schemas, and enums.
"""
