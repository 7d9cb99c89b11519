VERSION = __version__ = "1.0.0"

MAX_DIMS = 4
