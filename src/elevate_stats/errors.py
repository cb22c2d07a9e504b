class MalformedRecordError(ValueError):
    """A CSV row that cannot be turned into an Activity."""

    def __init__(self, message, row=None):
        self.row = row
        if row is not None:
            message = f"Row {row}: {message}"
        super().__init__(message)


class InvalidArguments(ValueError):
    pass


class InputNotFound(FileNotFoundError):
    pass
