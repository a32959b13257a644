# license_stamper/errors.py
from __future__ import annotations


class StampError(Exception):
    """
    Base for every failure of a stamping call.
    A stamping call either returns a fully stamped document or raises one of these.
    """


class InputDocumentError(StampError):
    """The supplied bytes could not be opened as a PDF document."""


# older name, still used by callers that only care about "bad document"
DocumentError = InputDocumentError


class EncodingError(StampError):
    """The license payload could not be rendered as a QR code."""


class ResourceEmbedError(StampError):
    """A font or image resource could not be prepared for the overlay."""
