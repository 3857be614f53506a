class AltchaError(Exception):
    """Base class for configuration errors raised by this package."""


class UnsupportedAlgorithm(AltchaError, ValueError):
    def __init__(self, algorithm):
        super().__init__(f"Unsupported algorithm: {algorithm!r}")
        self.algorithm = algorithm


class InvalidOptions(AltchaError, ValueError):
    pass
