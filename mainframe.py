#!/usr/bin/env python3
"""
Launcher script for the QC Production Log terminal UI.
"""

import sys

from qclog.adapters.mainframe_tui import main

if __name__ == "__main__":
    print("🚀 Iniciando QC Production Log - Terminal UI...")
    try:
        main()
    except KeyboardInterrupt:
        print("\n👋 Saindo do sistema...")
        sys.exit(0)
