from dataclasses import dataclass

from services.shared.domain.value_object import Identifier


@dataclass(frozen=True)
class PassengerId(Identifier):
    """搭乗者ID"""
