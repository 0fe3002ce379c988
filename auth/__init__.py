"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt, configurable work factor)
  • JWT creation & verification
  • CredentialStore (register / login / logout)
  • ``get_current_user`` FastAPI guard
  • Register / Login / Logout API routes
"""
