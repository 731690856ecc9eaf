"""
bl3shift — Borderlands SHiFT code auto-redeemer for the 2K companion API

Fetches the public code list, works out which codes still need redeeming on
the platforms linked to your account, redeems them, and remembers what was
already done so the next run only tries new codes.
"""

__version__ = "2.1"
