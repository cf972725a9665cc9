"""RUBIK Pi 3 initial setup (Python-first, step-driven).

Core design goals:
- Fixed, declared step order
- Idempotent file edits where practical
- Stop at the first failed step
- Centralized logging
"""

__all__ = []
