"""
CLI runner module.

Provides commands:
- register / my-items / show / qr: owner side
- report: finder side
- pending / verify / claims / status: staff side
- lost / claim: public lost listing and owner reclaim
- export / import: data snapshots
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
