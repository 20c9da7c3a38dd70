from __future__ import annotations


class PlotError(Exception):
    """Base class for failures raised while building or compiling a figure."""


class DegenerateAxisError(PlotError, ZeroDivisionError):
    pass


class InvalidChildError(PlotError, ValueError):
    pass


class PlotDataError(PlotError, ValueError):
    pass


class ChartConfigError(ValueError):
    pass


class InsufficientPointsWarning(UserWarning):
    pass
