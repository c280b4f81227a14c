"""Exceptions raised by the deedseal library."""


class DeedSealError(Exception):
    """Base exception for deedseal errors"""

    pass


class InvalidKey(DeedSealError):
    """The encryption key does not decode to exactly 32 bytes"""

    pass


class DecryptionFailed(DeedSealError):
    """Authentication failed; the plaintext is unavailable"""

    pass


class InvalidCiphertext(DecryptionFailed):
    """The payload is not valid base64 or is shorter than nonce + tag"""

    pass


class ExhaustedKeyspace(DeedSealError):
    """No unused identifier was found within the bounded attempts"""

    pass


class InvalidIdentifier(DeedSealError, ValueError):
    """Not a 6-digit hex identifier (or its decimal form)"""

    pass


class MalformedRecord(DeedSealError, ValueError):
    """A canonical record or extracted field set could not be parsed"""

    pass
