"""PlayerPath notifier.

Sends coach invitation emails when athletes invite coaches to shared
folders, and lets athletes resend them.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
