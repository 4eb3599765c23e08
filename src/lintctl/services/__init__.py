"""Service layer — lint operations returning ServiceResult.

Services may import from engine, scope, and infrastructure.
They must never import from commands or output.
"""
