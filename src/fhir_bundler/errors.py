"""Exceptions raised while assembling or disassembling bundles."""


class BundlerError(Exception):
    """Base class for all fhir-bundler errors."""

    pass


class InvalidResourceError(BundlerError, ValueError):
    """A resource document cannot be used for the requested entry."""

    pass


class NotABundleError(BundlerError, ValueError):
    """The input document is not a FHIR Bundle."""

    pass


class MissingIdentifierError(BundlerError, ValueError):
    """A bundle entry has no resource id to derive a file name from."""

    pass


class ConverterError(BundlerError, RuntimeError):
    """The external resource converter could not be started."""

    pass
