# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Run bug_tracker tools with ``python -m bug_tracker <command>``."""

from .verify import main

if __name__ == "__main__":
    main()
