"""
electricity — Prepaid electricity token vending.

Provides:
  • 20-digit HMAC token generation & verification
  • TID (token identifier) clock relative to the 1993-01-01 epoch
"""
