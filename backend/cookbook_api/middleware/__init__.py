"""
Middleware
CORS setup and the translation of failures into HTTP responses.
"""
