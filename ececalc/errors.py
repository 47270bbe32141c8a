"""
Exception types raised by the calculation engine.

Construction and precondition failures raise. A solver that finds no root
does not raise: it returns NaN so that formula chains can carry the
"no solution" state through to the caller.
"""


class ECECalcError(Exception):
    """Base class for all engine errors."""


class InvalidArgumentError(ECECalcError, ValueError):
    """A value, tolerance, precision or formula input is out of range."""


class InvalidGeometryError(InvalidArgumentError):
    """PCB trace geometry that the impedance approximations cannot handle."""


class InvalidIntervalError(InvalidArgumentError):
    """Malformed solver interval or initial guess."""


class DivisionByZeroError(ECECalcError, ZeroDivisionError):
    """Division by a value with zero real part or zero magnitude."""
