"""
Booking scheduling engine for venue management: conflict checks, buffer
enforcement, alternative times and open-slot listing.
"""

__version__ = "0.1.0"
