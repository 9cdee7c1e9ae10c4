"""
rvdisasm Output
===============

- ``listing`` -- plain-text ``.text`` / ``.symtab`` listing
- ``console`` -- Rich-based terminal display
"""
