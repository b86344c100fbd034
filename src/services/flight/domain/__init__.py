from .entity import Flight as Flight
from .enum import CabinClass as CabinClass
from .repository import FlightRepository as FlightRepository
from .value_object import FlightNumber as FlightNumber
from .value_object import SeatRelease as SeatRelease
