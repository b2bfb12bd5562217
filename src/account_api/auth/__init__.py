"""Authentication and authorization.

Learn: Two gating policies protect the API:
1. Frontends → static shared token in the Authorization header
2. Users → email/password → JWT access/refresh tokens

Password hashing, token issuance/verification and the gate
dependencies live here; handlers only orchestrate them.
"""
