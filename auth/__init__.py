"""
auth — User authentication module.

Provides:
  • JWT token creation & verification (PyJWT)
  • Password hashing (bcrypt)
  • Register / Login API routes
  • ``get_current_user_id`` FastAPI dependency
"""
