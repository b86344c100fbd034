from dataclasses import dataclass


@dataclass(frozen=True)
class SeatRelease:
    """座席返却の結果

    restocked は capacity で丸めた後に実際に戻した席数。
    """

    seats_available: int
    restocked: int
