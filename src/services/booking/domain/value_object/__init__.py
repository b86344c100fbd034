from .passenger_id import PassengerId as PassengerId
