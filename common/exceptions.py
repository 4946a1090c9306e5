"""Exception classes shared by the chain core and the store adapters."""


class DHTFSError(Exception):
    """
    Base exception class for all dhtfs errors.
    """
    pass


class NotAFileError(DHTFSError):
    """
    Raised when a path to be stored is not a regular file.
    """
    pass


class FileTooLargeError(DHTFSError):
    """
    Raised when a file exceeds the maximum storable size.
    """
    pass


class FormatError(DHTFSError):
    """
    Raised when a hash or node does not have the expected encoding.
    """
    pass


class StoreWriteError(DHTFSError):
    """
    Raised when a put fails while a chain is being built.
    """
    pass


class StoreReadError(DHTFSError):
    """
    Raised when a get fails or the requested hash is absent.
    """
    pass


class BlobNotFoundError(StoreReadError):
    """
    Raised when the store has no value for the requested hash.
    """
    pass


class IntegrityError(StoreReadError):
    """
    Raised when fetched bytes do not hash to the address they were requested by.
    """
    pass


class FetchExhaustedError(DHTFSError):
    """
    Raised when a node could not be fetched on both the first attempt and the retry.
    """
    pass
