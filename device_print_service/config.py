"""
Device Print Service Configuration
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('DPS_PORT', 5100))
HOST = os.environ.get('DPS_HOST', '0.0.0.0')
DEBUG = os.environ.get('DPS_DEBUG', 'false').lower() == 'true'

# API Key for mutating endpoints
API_KEY = os.environ.get('DPS_API_KEY', 'dps-print-key')

LOG_LEVEL = os.environ.get('DPS_LOG_LEVEL', 'INFO').upper()

# =============================================================================
# Printer Defaults
# =============================================================================

# Simulated print time per job (seconds)
NETWORK_PRINT_DELAY = float(os.environ.get('DPS_NETWORK_PRINT_DELAY', 1.0))
USB_PRINT_DELAY = float(os.environ.get('DPS_USB_PRINT_DELAY', 0.0))

# 0 = unbounded (accept every job)
PRINT_QUEUE_MAX = int(os.environ.get('DPS_PRINT_QUEUE_MAX', 0))

# Printers registered when the service starts
DEFAULT_PRINTERS = tuple(
    tag.strip().upper()
    for tag in os.environ.get('DPS_DEFAULT_PRINTERS', 'NETWORK,USB').split(',')
    if tag.strip()
)

# =============================================================================
# Supported Printer Types
# =============================================================================

PRINTER_TYPES = {
    'NETWORK': {
        'name': 'Network Printer',
        'connection': 'shared',
        'execution': 'queued',
        'description': 'Accepts many clients, prints queued jobs one at a time',
    },
    'USB': {
        'name': 'USB Printer',
        'connection': 'exclusive',
        'execution': 'synchronous',
        'description': 'One client at a time, prints immediately',
    },
}

# =============================================================================
# History Retention
# =============================================================================

JOB_HISTORY_LIMIT = int(os.environ.get('DPS_JOB_HISTORY_LIMIT', 500))
EVENT_HISTORY_LIMIT = int(os.environ.get('DPS_EVENT_HISTORY_LIMIT', 1000))


@dataclass
class Settings:
    """Snapshot of the configuration handed to a PrinterManager."""

    network_print_delay: float = NETWORK_PRINT_DELAY
    usb_print_delay: float = USB_PRINT_DELAY
    print_queue_max: int = PRINT_QUEUE_MAX
    job_history_limit: int = JOB_HISTORY_LIMIT
    event_history_limit: int = EVENT_HISTORY_LIMIT
    default_printers: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_PRINTERS)

    @property
    def max_pending(self) -> Optional[int]:
        """Queue bound for network printers, None when unbounded."""
        return self.print_queue_max if self.print_queue_max > 0 else None

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from the module-level values."""
        return cls()
