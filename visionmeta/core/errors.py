"""
Exception hierarchy for visionmeta.

Still-image injectors convert these into pass-through results; only the
video paths let them reach the caller.
"""


class VisionMetaError(Exception):
    """Base class for all visionmeta errors."""


class UnsupportedFormat(VisionMetaError):
    """No injector is registered for the asset's MIME type or extension."""


class MalformedContainer(VisionMetaError):
    """The buffer does not carry the signature its format requires."""


class InjectionFailure(VisionMetaError):
    """Building or splicing a metadata container failed."""


class DecodeFailure(VisionMetaError):
    """Media could not be decoded for analysis."""
