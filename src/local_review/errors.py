class LocalReviewError(Exception):
    """Base error for local-review collaborators."""


class HistoryError(LocalReviewError):
    pass


class ExportFormatError(LocalReviewError):
    pass


class GitError(LocalReviewError):
    pass
