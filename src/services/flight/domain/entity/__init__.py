from .flight import Flight as Flight
