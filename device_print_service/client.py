"""
Device Print Service Client
===========================

Python SDK for interacting with the Device Print Service.

Usage:
    from device_print_service.client import PrintClient

    client = PrintClient('http://localhost:5100', api_key='your-key')

    client.connect('USB', 'Computer2')
    client.print_document('USB', 'USB Document X')
    client.disconnect('USB')

    # Network jobs come back queued; watch the events for completion
    client.print_document('NETWORK', 'Document 1')
    client.list_events(kind='print_finished')
"""

import requests
from typing import Dict, Any, Optional, List


class PrintClient:
    """Client for the Device Print Service."""

    def __init__(self, base_url: str = 'http://localhost:5100', api_key: str = None,
                 timeout: float = 30):
        """
        Initialize client.

        Args:
            base_url: Base URL of the print service
            api_key: API key for authentication
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _request(self, method: str, endpoint: str, data: Dict = None,
                 params: Dict = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'

        try:
            if method == 'GET':
                response = requests.get(url, headers=self._headers(), params=params,
                                        timeout=self.timeout)
            elif method == 'POST':
                response = requests.post(url, json=data or {}, headers=self._headers(),
                                         timeout=self.timeout)
            else:
                raise ValueError(f'Unknown method: {method}')

            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except ValueError as e:
            return {'success': False, 'error': str(e)}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if service is online."""
        result = self.health()
        return result.get('status') == 'online'

    # =========================================================================
    # Printers
    # =========================================================================

    def list_printers(self) -> List[Dict[str, Any]]:
        """List all printers."""
        result = self._request('GET', '/api/printers')
        return result.get('printers', [])

    def get_printer(self, printer_type: str) -> Optional[Dict[str, Any]]:
        """Get printer by type."""
        result = self._request('GET', f'/api/printers/{printer_type}')
        return result.get('printer') if result.get('success') else None

    def add_printer(self, printer_type: str) -> Dict[str, Any]:
        """Register a printer of the given type (NETWORK or USB)."""
        return self._request('POST', '/api/printers', {'printer_type': printer_type})

    # =========================================================================
    # Connections
    # =========================================================================

    def connect(self, printer_type: str, client_id: str) -> Dict[str, Any]:
        """Attach a client machine to a printer."""
        return self._request('POST', f'/api/printers/{printer_type}/connect',
                             {'client_id': client_id})

    def disconnect(self, printer_type: str, client_id: str = None) -> Dict[str, Any]:
        """Detach a client machine. USB printers accept no client_id."""
        data = {'client_id': client_id} if client_id else {}
        return self._request('POST', f'/api/printers/{printer_type}/disconnect', data)

    # =========================================================================
    # Printing
    # =========================================================================

    def print_document(self, printer_type: str, document: str) -> Dict[str, Any]:
        """
        Submit a document.

        Args:
            printer_type: Target printer type
            document: Document text

        Returns:
            Response dict; ``job.status`` is ``queued``/``printing`` for
            network printers and ``completed`` for USB printers
        """
        return self._request('POST', f'/api/printers/{printer_type}/print',
                             {'document': document})

    # =========================================================================
    # History
    # =========================================================================

    def list_jobs(self, printer_type: str = None, limit: int = 50) -> List[Dict[str, Any]]:
        """List recent print jobs."""
        params = {'limit': limit}
        if printer_type:
            params['printer_type'] = printer_type
        result = self._request('GET', '/api/jobs', params=params)
        return result.get('jobs', [])

    def list_events(self, kind: str = None, limit: int = 100) -> List[Dict[str, Any]]:
        """List recent printer events, oldest first."""
        params = {'limit': limit}
        if kind:
            params['kind'] = kind
        result = self._request('GET', '/api/events', params=params)
        return result.get('events', [])
