"""
rvdisasm Analyzers
==================

- ``encoding`` -- RV32 bit fields and immediates
- ``labels``   -- pass 1, label and jump-target resolution
- ``decoder``  -- pass 2, instruction decoding
"""
