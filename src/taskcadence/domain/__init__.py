"""Domain layer — dates, recurrence rules, and their failures.

This layer depends only on stdlib.
It must never import from services, commands, config, or output.
"""
