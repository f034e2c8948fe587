"""SalesPulse: in-memory sales task store and dashboard analytics."""

__version__ = "0.1.0"
