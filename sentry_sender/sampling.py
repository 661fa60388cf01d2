import random
from typing import Callable, Union

Number = Union[int, float]


def sample_event(
    sample_rate: Number, draw: Callable[[], float] = random.random
) -> bool:
    """
    Decide whether an event should be sent.

    Rates of exactly 1 and 0 never draw a random number.

    Args:
        sample_rate: Probability in [0, 1] of keeping the event.
        draw: Source of uniform floats in [0, 1).

    Returns:
        bool: True if the event should be sent.
    """
    if sample_rate == 1:
        return True

    if sample_rate == 0:
        return False

    return draw() < sample_rate
