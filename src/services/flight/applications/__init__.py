from .flight_inventory import FlightInventoryService as FlightInventoryService
