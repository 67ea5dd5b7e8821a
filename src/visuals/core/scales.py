"""Value scale shared between the playback driver and renderers."""


class LinearScale:
    """Holds the value domain of the race's x axis.

    The driver resets the domain to ``(0, leader value)`` every keyframe; the
    axis renderer animates the plot limits towards it.
    """

    def __init__(self, domain: tuple[float, float] = (0.0, 1.0)) -> None:
        self.domain = domain
