class CMSError(Exception):
    """Base class for failures raised while talking to or mapping CMS data."""


class FormatError(CMSError, ValueError):
    """A publication date is missing or cannot be parsed."""


class FetchError(CMSError):
    """The CMS could not be reached or returned an unusable response."""


class NotFoundError(CMSError):
    """No document with the requested UID exists in the CMS."""

    def __init__(self, doc_type: str, uid: str):
        super().__init__(f"No {doc_type} document with uid {uid!r}")
        self.doc_type = doc_type
        self.uid = uid
