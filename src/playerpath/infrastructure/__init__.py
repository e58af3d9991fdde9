"""Infrastructure layer - external dependencies and implementations.

Contains the document store (SQLAlchemy), email delivery (Jinja2, Resend),
identity token verification (JWT) and the HTTP surface (FastAPI).
"""
