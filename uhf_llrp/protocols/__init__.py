"""LLRP framing, type registry and codec."""
