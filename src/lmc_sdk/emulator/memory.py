"""
Memory Subsystem for the LMC Emulator
=====================================

The Little Man Computer has a single flat store of 100 cells ("mailboxes"),
addressed 0-99, each holding a three-digit decimal word 0-999. Program and
data share the same cells: there is no ROM, no banking and no I/O region.

Loading an image copies it to the start of memory and clears every cell
past its end, so a run never sees words left over from a previous program.
"""

from typing import Iterable, Iterator

from lmc_sdk.cpu import MAX_WORD, MEMORY_SIZE, is_valid_word
from lmc_sdk.errors import MemoryImageError


class Memory:
    """
    100-cell LMC memory.

    Addresses are taken modulo 100 on read and write; the CPU only ever
    produces addresses 0-99, so this only matters for callers poking at
    memory directly.

    Example:
        >>> mem = Memory()
        >>> mem.load([901, 0])
        >>> mem.read(0), mem.read(1), mem.read(2)
        (901, 0, 0)
    """

    def __init__(self, image: Iterable[int] | None = None):
        """
        Initialize memory, all cells zero.

        Args:
            image: Optional words to load at address 0
        """
        self._cells: list[int] = [0] * MEMORY_SIZE
        if image is not None:
            self.load(image)

    def __len__(self) -> int:
        return MEMORY_SIZE

    def __getitem__(self, address: int) -> int:
        return self.read(address)

    def __iter__(self) -> Iterator[int]:
        return iter(self._cells)

    def read(self, address: int) -> int:
        """Read the word at address."""
        return self._cells[address % MEMORY_SIZE]

    def write(self, address: int, value: int) -> None:
        """
        Write a word.

        Raises:
            ValueError: If value is not a word (0-999)
        """
        if not is_valid_word(value):
            raise ValueError(f"word out of range: {value} (expected 0-{MAX_WORD})")
        self._cells[address % MEMORY_SIZE] = value

    def load(self, image: Iterable[int]) -> None:
        """
        Replace memory contents with image.

        Cells past the end of the image are set to 0.

        Raises:
            MemoryImageError: If the image has more than 100 words or any
                word outside 0-999. Memory is unchanged in that case.
        """
        words = list(image)
        if len(words) > MEMORY_SIZE:
            raise MemoryImageError(
                f"image has {len(words)} words; memory holds {MEMORY_SIZE}"
            )
        for address, word in enumerate(words):
            if not isinstance(word, int) or not is_valid_word(word):
                raise MemoryImageError(
                    f"invalid word {word!r} at address {address} (expected 0-{MAX_WORD})"
                )

        self._cells = words + [0] * (MEMORY_SIZE - len(words))

    def reset(self) -> None:
        """Clear every cell to 0."""
        self._cells = [0] * MEMORY_SIZE

    def snapshot(self) -> tuple[int, ...]:
        """Return an immutable copy of all 100 cells."""
        return tuple(self._cells)
