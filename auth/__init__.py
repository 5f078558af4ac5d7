"""
auth — User authentication module.

Provides:
  • HS256 JWT creation, validation & claim extraction
  • Password hashing (argon2id)
  • Register / Login / Me API routes
  • ``get_current_subject`` FastAPI dependency
"""
