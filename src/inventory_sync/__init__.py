"""
Inventory Sync.

Keeps storefront variant stock, price and cost in line with the
authoritative ERP catalog by running periodic reconciliation rounds.
"""

__version__ = "1.0.0"
