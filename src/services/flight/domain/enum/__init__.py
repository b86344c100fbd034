from .cabin_class import CabinClass as CabinClass
