"""Edge color channel masks."""

from enum import IntFlag


class EdgeColor(IntFlag):
    """Set of distance field channels an edge contributes to.

    Encoded as a 3-bit mask: bit 0 is red, bit 1 green, bit 2 blue.
    BLACK means the edge has not been colored yet and WHITE means it
    contributes to every channel.
    """

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


# Channel index in the bitmap paired with the mask bit it reads.
CHANNEL_MASKS: tuple[EdgeColor, EdgeColor, EdgeColor] = (
    EdgeColor.RED,
    EdgeColor.GREEN,
    EdgeColor.BLUE,
)
