"""Infrastructure layer — filesystem walking and external tool processes.

This layer depends on stdlib and lintctl.scope only.
It must never import from engine, services, commands, or output.
"""
