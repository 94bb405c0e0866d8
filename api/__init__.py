"""api/ -- FastAPI application, middleware, exception handlers and JSON models.

Layer rule: api/ imports auth/ and core/, never web/. asgi.py joins api/ and web/.
"""
