"""
asgi.py -- Application assembly for SessionGate.

This is the ONLY module that imports from both api/ and web/. It joins the two
independent layers into a single ASGI app without coupling them to each other.

Run with:  uvicorn asgi:app --reload
           python main.py serve
"""

from api.main import app
from web.routes import router as web_router

app.include_router(web_router, tags=["Web UI"])
