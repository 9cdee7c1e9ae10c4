"""
Label / Jump Resolver
=====================

First pass over ``.text``: names every jump and branch target so the
decoder can print ``jal``/``b*`` operands with a label.

Algorithm:
    1. Seed the label map with ``{value: name}`` for each function symbol.
    2. Walk ``.text`` word by word.  For each ``jal`` or conditional
       branch compute ``target = address + offset``.
    3. If ``target`` has no label yet, name it ``LOC_<counter>`` (five
       lower-case hex digits by default).
    4. Record ``jumps[address] = labels[target]``.
    5. Advance the counter for every jump seen, labelled or not, so
       synthetic suffixes can skip values.
"""

from __future__ import annotations

from typing import Iterable, Optional

from shared.logger import RvLogger

from rvdisasm.analyzers.encoding import MASK32, is_jump, jump_offset
from rvdisasm.core.models import LabelResolution, SymbolTableEntry


class LabelResolver:
    """Builds the label map and the jump map in one forward pass.

    Usage::

        resolver = LabelResolver(prefix="LOC_", digits=5)
        resolution = resolver.resolve(elf.iter_text(), elf.symbols)
        resolution.jumps[0x10000]    # -> "LOC_00000"
    """

    def __init__(
        self,
        prefix: str = "LOC_",
        digits: int = 5,
        logger: Optional[RvLogger] = None,
    ) -> None:
        self._prefix = prefix
        self._digits = digits
        self._logger = logger or RvLogger("labels", console_output=False)

    def synthetic_name(self, number: int) -> str:
        """Return the synthetic label for sequence *number*."""
        return f"{self._prefix}{number:0{self._digits}x}"

    @staticmethod
    def function_labels(symbols: Iterable[SymbolTableEntry]) -> dict[int, str]:
        """Map each function symbol's value to its name; later entries win."""
        return {entry.st_value: entry.name for entry in symbols if entry.is_function}

    def resolve(
        self,
        words: Iterable[tuple[int, int]],
        symbols: Iterable[SymbolTableEntry],
    ) -> LabelResolution:
        """Run the resolution pass.

        Args:
            words: ``(address, word)`` pairs in ``.text`` order.
            symbols: Symbol table entries; only functions seed labels.

        Returns:
            The completed :class:`LabelResolution`.
        """
        labels = self.function_labels(symbols)
        seeded = len(labels)
        jumps: dict[int, str] = {}
        counter = 0

        for address, word in words:
            if not is_jump(word):
                continue
            target = (address + jump_offset(word)) & MASK32
            if target not in labels:
                labels[target] = self.synthetic_name(counter)
            jumps[address] = labels[target]
            counter += 1

        self._logger.debug(
            "Resolved %d jump(s); %d function label(s), %d synthetic label(s)",
            len(jumps), seeded, len(labels) - seeded,
        )
        return LabelResolution(labels=labels, jumps=jumps, counter=counter)
