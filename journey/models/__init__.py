from .trips.trip_model import Trip
from .trips.participant import Participant
from .trips.activity import Activity
from .trips.link import Link
