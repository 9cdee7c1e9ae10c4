"""
rvdisasm Module Entry Point
===========================

Allows running the CLI via: python -m rvdisasm
"""

from rvdisasm.cli import main

if __name__ == "__main__":
    main()
