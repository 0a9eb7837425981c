# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
FinanTech
---------

The business-rules core of a multi-tenant financial-management application
for Small and Medium-sized Businesses (SMBs), with a command-line interface.

Main capabilities:
- accounts payable / receivable with late-payment interest and fines,
- recurring transactions and rent receivables with yearly adjustment,
- grouped tables with per-group subtotals (status, cost center, type),
- AI-assisted bank reconciliation and advisory text,
- CPF / CNPJ validation,
- property, project and proposal rollups,
- cash-basis income statement (DRE),
- simplified tax regime simulation,
- snapshot persistence of every entity list in SQLite.

Every entity belongs to one company (tenant); lists are always filtered by
company before being displayed or aggregated.


Version: 0.1.0

Usage:
    finantech --help
    python -m finantech --help
"""

__all__ = ["charges", "dates", "grouping", "reconciliation", "recurrence", "workspace"]

__version__ = "0.1.0"
