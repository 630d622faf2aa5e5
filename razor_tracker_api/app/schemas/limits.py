"""
Integer bounds for stored values.

SQLite stores integers as signed 64-bit values; anything outside this
range cannot be written or compared, so requests are bounded by it.
"""

MAX_INTEGER = 2**63 - 1
MIN_INTEGER = -(2**63)
