"""API routes package"""

from . import auth, households, pets, activities, profile, photos, health

__all__ = ["auth", "households", "pets", "activities", "profile", "photos", "health"]
