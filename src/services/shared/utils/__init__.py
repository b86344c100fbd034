from .compensation import CompensationStack as CompensationStack
from .logger import get_logger as get_logger
from .side_effects import run_side_effect as run_side_effect
from .validators import blank_to_none as blank_to_none
from .validators import to_decimal as to_decimal
