"""
Local support modules for the invoice draft core.

Modules:
    logs: Logging utilities
"""

from invoice_draft.lib import logs

__all__ = ["logs"]
