"""
Invoice Draft: computation and data-integrity core of an invoice editor.

This package computes invoice totals, spells them out in words, validates
drafts before printing, and loads/saves the JSON invoice file. Presentation
code owns an InvoiceSession and calls into it.

Subpackages and modules:
- models: Invoice document model and boundary result types
- calculations: Money rounding and derived totals
- validation: Rules gating print/export
- codec: JSON invoice file load/save
- state: InvoiceSession, the per-session document container
- utils: Number-to-words and locale formatting
- lib: Logging

Main entry points:
- state.InvoiceSession: Editing session used by the UI layer
- defaults.get_default_invoice(): Blank invoice for a new session
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
