"""
Scheduling domain

Appointment booking with per-staff overlap detection.
"""

from .router import router

__all__ = ["router"]
