"""Database models for RegDesk"""

from regdesk.models.registration import Registration

__all__ = [
    "Registration",
]
