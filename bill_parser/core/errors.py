"""
Error kinds for the capture -> edit -> split flow.

Every error carries a human-readable message meant for display. None of
them is fatal: the stage that raised stays interactive so the user can retry.
"""


class BillFlowError(Exception):
    """Base class for all user-recoverable flow errors"""

    kind = "BillFlowError"
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFileType(BillFlowError):
    kind = "InvalidFileType"
    default_message = "Please select a valid image file"


class NoFileSelected(BillFlowError):
    kind = "NoFileSelected"
    default_message = "Please select a file first"


class UploadInProgress(BillFlowError):
    kind = "UploadInProgress"
    default_message = "An upload is already in progress"


class ParseFailed(BillFlowError):
    """The parse service answered, but not with a usable bill"""

    kind = "ParseFailed"
    default_message = "Something went wrong"


class TransportFault(BillFlowError):
    """The parse service could not be reached"""

    kind = "TransportFault"
    default_message = "Failed to upload and process the image"


class MalformedStoredDocument(BillFlowError):
    """Stored handoff payload has the wrong shape. Recovered as 'no document'."""

    kind = "MalformedStoredDocument"
    default_message = "Stored bill data is malformed"


class OutOfRange(BillFlowError):
    kind = "OutOfRange"
    default_message = "Item index out of range"

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Item index {index} out of range for {length} item(s)")


class NoDocumentLoaded(BillFlowError):
    kind = "NoDocumentLoaded"
    default_message = "No bill loaded. Upload an image to get started."
