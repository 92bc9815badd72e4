"""
Core arbitrary-precision integer engine.

This package contains the limb-level magnitude arithmetic, the hex codec,
and the signed BigInt value type built on top of them. It performs no I/O.
"""
