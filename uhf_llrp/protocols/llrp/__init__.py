"""LLRP 1.0.1 messages and parameters, with the Impinj extensions."""
