from __future__ import annotations


class SkypathError(Exception):
    """Base class for errors raised by skypath."""


class UnsupportedFormatError(SkypathError, ValueError):
    pass


class IncompatibleArgumentsError(SkypathError, ValueError):
    pass


class EphemerisError(SkypathError, RuntimeError):
    pass


class CalculationError(SkypathError, RuntimeError):
    pass
