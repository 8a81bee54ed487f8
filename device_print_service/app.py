"""
Device Print Service - Main Application
=======================================

HTTP front end for a PrinterManager.

Run: python -m device_print_service
"""

import sys
import platform
import socket
from datetime import datetime
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS

from . import __version__
from .config import PORT, HOST, DEBUG, API_KEY, LOG_LEVEL, PRINTER_TYPES
from .errors import (
    PrinterError,
    AlreadyConnectedError,
    NotConnectedError,
    WrongClientError,
    UnsupportedPrinterTypeError,
    PrinterNotFoundError,
    QueueFullError,
)
from .events import configure_logging
from .manager import PrinterManager
from .models import PrinterType

# HTTP status per error type
ERROR_STATUS = {
    UnsupportedPrinterTypeError: 400,
    PrinterNotFoundError: 404,
    AlreadyConnectedError: 409,
    NotConnectedError: 409,
    WrongClientError: 409,
    QueueFullError: 503,
}


def _error(message: str, status: int):
    return jsonify({'success': False, 'error': message}), status


def _json_body():
    """Request JSON as a dict: {} when absent, None when not an object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _check_api_key(api_key: str) -> bool:
    """Validate API key from request body or Bearer header."""
    data = _json_body() or {}
    auth_header = request.headers.get('Authorization', '')

    if data.get('api_key') == api_key:
        return True

    if auth_header.startswith('Bearer ') and auth_header[7:] == api_key:
        return True

    return False


def create_app(manager: Optional[PrinterManager] = None, api_key: str = API_KEY) -> Flask:
    """
    Build the Flask application around a printer manager.

    Args:
        manager: Registry to expose. A new one with the default printers
            is created when omitted.
        api_key: Key required by mutating endpoints
    """
    if manager is None:
        manager = PrinterManager()
        manager.add_default_printers()

    app = Flask(__name__)
    CORS(app)
    app.config['PRINTER_MANAGER'] = manager

    @app.errorhandler(PrinterError)
    def handle_printer_error(error: PrinterError):
        status = ERROR_STATUS.get(type(error), 400)
        return _error(str(error), status)

    def require_api_key():
        if not _check_api_key(api_key):
            return _error('Invalid API key', 401)
        return None

    # =========================================================================
    # Health & Info Endpoints
    # =========================================================================

    @app.route('/health', methods=['GET'])
    def health():
        """Health check with system info."""
        return jsonify({
            'status': 'online',
            'version': __version__,
            'hostname': socket.gethostname(),
            'platform': platform.system(),
            'python': sys.version.split()[0],
            'printers_registered': len(manager),
            'timestamp': datetime.now().isoformat(),
        })

    @app.route('/api', methods=['GET'])
    def api_info():
        """API info (JSON)."""
        return jsonify({
            'service': 'Device Print Service',
            'version': __version__,
            'status': 'running',
            'printer_types': PRINTER_TYPES,
            'endpoints': {
                'health': '/health',
                'printers': '/api/printers',
                'jobs': '/api/jobs',
                'events': '/api/events',
            }
        })

    # =========================================================================
    # Printer Registry API
    # =========================================================================

    @app.route('/api/printers', methods=['GET'])
    def list_printers():
        """List all registered printers."""
        printers = [p.to_dict() for p in manager.printers()]
        return jsonify({
            'success': True,
            'printers': printers,
            'count': len(printers),
        })

    @app.route('/api/printers', methods=['POST'])
    def add_printer():
        """Register a printer for a type (replaces an existing one)."""
        denied = require_api_key()
        if denied:
            return denied

        data = _json_body()
        if not data:
            return _error('Request body required', 400)
        if not data.get('printer_type'):
            return _error('Printer type required', 400)

        printer = manager.add_printer(data['printer_type'])
        return jsonify({
            'success': True,
            'printer': printer.to_dict(),
            'message': 'Printer added successfully',
        }), 201

    @app.route('/api/printers/<printer_type>', methods=['GET'])
    def get_printer(printer_type):
        """Get printer details."""
        printer = manager.get_printer(printer_type)
        return jsonify({
            'success': True,
            'printer': printer.to_dict(),
        })

    # =========================================================================
    # Printer Actions
    # =========================================================================

    @app.route('/api/printers/<printer_type>/connect', methods=['POST'])
    def connect_printer(printer_type):
        """Attach a client machine."""
        denied = require_api_key()
        if denied:
            return denied

        data = _json_body()
        if data is None:
            return _error('Request body must be a JSON object', 400)
        client_id = data.get('client_id')
        if not client_id:
            return _error('client_id required', 400)

        manager.connect(printer_type, client_id)
        return jsonify({
            'success': True,
            'printer': manager.get_printer(printer_type).to_dict(),
        })

    @app.route('/api/printers/<printer_type>/disconnect', methods=['POST'])
    def disconnect_printer(printer_type):
        """Detach a client machine (USB: omit client_id to detach the holder)."""
        denied = require_api_key()
        if denied:
            return denied

        data = _json_body()
        if data is None:
            return _error('Request body must be a JSON object', 400)
        manager.disconnect(printer_type, data.get('client_id'))
        return jsonify({
            'success': True,
            'printer': manager.get_printer(printer_type).to_dict(),
        })

    @app.route('/api/printers/<printer_type>/print', methods=['POST'])
    def print_document(printer_type):
        """Submit a document. Network jobs are accepted (202), USB jobs are done (200)."""
        denied = require_api_key()
        if denied:
            return denied

        data = _json_body()
        if not data:
            return _error('Request body required', 400)
        if 'document' not in data or not isinstance(data['document'], str):
            return _error('document required', 400)

        job = manager.submit_document(printer_type, data['document'])
        status = 200 if job.done else 202
        return jsonify({
            'success': True,
            'job': job.to_dict(),
        }), status

    # =========================================================================
    # History
    # =========================================================================

    @app.route('/api/jobs', methods=['GET'])
    def list_jobs():
        """List recent jobs."""
        limit = request.args.get('limit', 50, type=int)
        printer_type = request.args.get('printer_type')

        jobs = manager.jobs(limit=limit, printer_type=printer_type)
        return jsonify({
            'success': True,
            'jobs': [j.to_dict() for j in jobs],
            'count': len(jobs),
        })

    @app.route('/api/events', methods=['GET'])
    def list_events():
        """List recent events, oldest first."""
        limit = request.args.get('limit', 100, type=int)
        kind = request.args.get('kind')

        events = manager.events.history(limit=limit, kind=kind)
        return jsonify({
            'success': True,
            'events': [e.to_dict() for e in events],
            'count': len(events),
        })

    return app


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the service."""
    configure_logging(LOG_LEVEL)

    manager = PrinterManager()
    manager.add_default_printers()
    app = create_app(manager)

    print("=" * 60)
    print("  Device Print Service")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Port: {PORT}")
    print(f"  Printers: {', '.join(p.printer_type.value for p in manager.printers()) or 'none'}")
    print("=" * 60)
    print("  API Endpoints:")
    print("    GET  /health                          - Health check")
    print("    GET  /api/printers                    - List printers")
    print("    POST /api/printers                    - Add printer")
    print("    GET  /api/printers/{type}             - Get printer")
    print("    POST /api/printers/{type}/connect     - Connect a client")
    print("    POST /api/printers/{type}/disconnect  - Disconnect a client")
    print("    POST /api/printers/{type}/print       - Submit document")
    print("    GET  /api/jobs                        - Job history")
    print("    GET  /api/events                      - Event history")
    print(f"  Types: {', '.join(t.value for t in PrinterType)}")
    print("=" * 60)

    try:
        app.run(host=HOST, port=PORT, debug=DEBUG)
    finally:
        manager.close()


if __name__ == '__main__':
    main()
