__version__ = "0.1.0"

PROG_NAME = "sound-mush"


class SoundMushError(Exception):
    """
    Base class for all errors raised by sound-mush when a conversion cannot
    be completed
    """
    pass
