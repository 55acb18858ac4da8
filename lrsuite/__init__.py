"""SLR(1) and LR(1) parser table construction, shift-reduce parsing and reports."""

__version__ = "0.1.0"
__all__ = ["__version__"]