#!/usr/bin/env python3
"""Run script for SalesPulse."""

import uvicorn

from salespulse.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "salespulse.api.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level,
    )
