"""Service layer — contract operations returning ServiceResult.

Services may import from domain, schemas and infrastructure.
They must never import from commands or output.
"""
