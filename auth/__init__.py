"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt)
  • Credential and reset-token stores
  • ``AuthService`` — signup, login, forgot / reset password
  • Signup / login / password-reset API routes
"""
