"""
rvdisasm Core
=============

Data models, error families and the pipeline engine.
"""
