"""
Infrastructure layer for the contract billing back office.

Implements the domain ports against the REST backend:
- Session context and token inspection (PyJWT)
- HTTP transport (requests)
- Wire mappers and HTTP repositories
- Local validation of payment proofs
"""
