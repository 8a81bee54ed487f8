"""
Device Print Service
====================

Simulated print devices shared by client machines.

Supports:
- Network printers (shared, queued, one job at a time)
- USB printers (exclusive link, synchronous printing)

Usage:
    python -m device_print_service

API Endpoints:
    GET  /api/printers                    - List all printers
    POST /api/printers                    - Register a printer
    GET  /api/printers/{type}             - Get printer details
    POST /api/printers/{type}/connect     - Connect a client
    POST /api/printers/{type}/disconnect  - Disconnect a client
    POST /api/printers/{type}/print       - Submit a document
    GET  /api/jobs                        - Job history
    GET  /api/events                      - Event history
"""

__version__ = '1.0.0'
__author__ = 'Device Print Service Developers'
