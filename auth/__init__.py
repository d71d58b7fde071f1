"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification
  • Password hashing (bcrypt, salted, tunable work factor)
  • Credential store over the ``users`` table
  • Register / Login / Me API routes
  • ``get_auth_context`` FastAPI dependency
"""
