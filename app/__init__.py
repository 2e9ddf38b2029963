"""Forum notification service.

Keeping this file makes ``app`` a regular package, so imports never resolve
to an unrelated ``app`` namespace found on ``sys.path``.
"""
