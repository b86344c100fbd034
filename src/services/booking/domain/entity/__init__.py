from .booking import Booking as Booking
from .passenger import Passenger as Passenger
