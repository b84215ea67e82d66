from . import users
from . import trips
from . import date_pitches
from . import destination_pitches
from . import travel_confirmations
from . import activities

__all__ = [
    "users",
    "trips",
    "date_pitches",
    "destination_pitches",
    "travel_confirmations",
    "activities",
]
