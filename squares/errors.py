class FormatError(ValueError):
    """Board text (or a hand-built board) does not fit the squares grammar."""
