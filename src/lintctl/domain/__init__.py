"""Domain layer — shared enums for lint domains and planned actions.

This layer depends only on stdlib.
It must never import from engine, services, infrastructure, commands, or config.
"""
