"""Account API — registration, login and profile management.

A small account service: users register and log in with email/password,
receive signed access/refresh tokens, and read or update their own
profile. Users live in a MongoDB document store keyed by email.
"""

__version__ = "0.1.0"
