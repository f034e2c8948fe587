"""HTTP surface for SalesPulse."""
