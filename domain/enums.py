"""
Domain enums for the Darents application.
Contains all enumeration types used across the domain models.
"""

import enum


class ActivityType(str, enum.Enum):
    """Known kinds of pet activity; stored activity types are not limited to these"""

    WALK = "Walk"
    FEED = "Feed"
    PLAY = "Play"
    POTTY = "Potty"
    MEDICAL = "Medical"
    MEDICATION = "Medication"
    PLAY_DATE = "Play Date"
    DAYCARE = "Daycare"


class AuthProvider(str, enum.Enum):
    """Ways a darent can sign in"""

    PASSWORD = "password"
    GOOGLE = "google.com"
    APPLE = "apple.com"
