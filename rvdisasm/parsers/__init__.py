"""
rvdisasm Parsers
================

- ``byte_source``   -- bounds-checked little-endian reads
- ``elf_parser``    -- ELF32 header and section discovery
- ``string_table``  -- null-terminated string cursor
- ``symbol_table``  -- ``.symtab`` entries with resolved names
"""
