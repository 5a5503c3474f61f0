class SaturatingCounter:
    """Unsigned counter of fixed bit width that sticks at its maximum.

    Only the increment/read/reset contract is exposed; the value is a plain
    int rather than a packed bit field.
    """

    def __init__(self, bits: int):
        if bits <= 0:
            raise ValueError(f"Counter width must be positive, got {bits}")
        self.bits = bits
        self.max_value = (1 << bits) - 1
        self._value = 0

    def increment(self) -> None:
        if self._value < self.max_value:
            self._value += 1

    def read(self) -> int:
        return self._value

    def reset(self) -> None:
        self._value = 0

    def is_saturated(self) -> bool:
        return self._value == self.max_value

    def __repr__(self) -> str:
        return f"SaturatingCounter(bits={self.bits}, value={self._value})"
