"""Application exceptions."""


class VestriError(Exception):
    pass


class CatalogUnavailableError(VestriError):
    """The showtime store could not be reached after all retries."""


class ImportValidationError(VestriError):
    """A spreadsheet import contained rows that failed validation."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__(f"{len(errors)} invalid row(s) in import")
        self.errors = errors
