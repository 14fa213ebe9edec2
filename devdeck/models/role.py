"""Closed set of account roles."""

import enum


class Role(str, enum.Enum):
    """Account role. Compared only inside ``devdeck.core.policy``."""
    admin = "admin"
    dev = "dev"
    recruiter = "recruiter"
