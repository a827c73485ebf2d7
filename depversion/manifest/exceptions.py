"""Manifest lookup exceptions.

Read failures other than a missing file (permissions, invalid JSON) are not
wrapped; they reach the caller as the OSError or json.JSONDecodeError raised
by the filesystem.
"""


class ManifestError(Exception):
    """Base exception for description file problems detected by this package."""

    pass


class InvalidDescriptionFileError(ManifestError):
    """A description file parsed fine but does not hold a JSON object.

    Raised for arrays, strings, numbers, booleans and null so that callers can
    point the user at the offending file.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Description file {path} is not an object")
        self.path = path
