from .flight_number import FlightNumber as FlightNumber
from .seat_release import SeatRelease as SeatRelease
