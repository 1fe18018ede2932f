"""
PORTFOLIO ASSISTANT APPLICATION PACKAGE
=======================================

This directory is the main Python package for the portfolio assistant backend.

  from app.main import app, create_app
  from app.models import ChatRequest, Intent
  from app.services.chat_service import ChatService

FILE STRUCTURE:
  app/
    __init__.py        - This file; marks 'app' as a package.
    main.py            - FastAPI app and all HTTP endpoints (/chat, /demo, /health).
    models.py          - Pydantic models for API requests and responses.
    errors.py          - InvalidInput / UnknownDiscriminant / InternalFailure.
    knowledge_base.py  - Static, read-only profile data the chat answers from.
    services/          - Business logic: intent classifier, response generator, chat, demo kernels.
    utils/             - Helpers: clock and simulated delays.
"""
