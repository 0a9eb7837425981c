# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

from .cli import main

if __name__ == "__main__":
    main()
