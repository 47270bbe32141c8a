"""
Analog-to-digital converter scaling.

An n-bit converter with references Vref- and Vref+ maps Vref- to code 0 and
Vref+ to code 2^n - 1, so one count is (Vref+ - Vref-) / (2^n - 1).
"""

from dataclasses import dataclass

from ececalc.errors import InvalidArgumentError

MIN_BITS = 2
MAX_BITS = 32


@dataclass(frozen=True)
class ADC:
    """Converter resolution and reference voltages (V)."""
    bits: int
    vref_high: float
    vref_low: float = 0.0

    def __post_init__(self):
        if not MIN_BITS <= self.bits <= MAX_BITS or int(self.bits) != self.bits:
            raise InvalidArgumentError(f'resolution must be {MIN_BITS}..{MAX_BITS} bits, got {self.bits}')
        if not self.vref_high - self.vref_low > 0.0:
            raise InvalidArgumentError('Vref+ must be above Vref-')

    @property
    def max_count(self) -> int:
        return 2 ** int(self.bits) - 1

    @property
    def span(self) -> float:
        return self.vref_high - self.vref_low

    @property
    def step_size(self) -> float:
        """Volts per count."""
        return self.span / self.max_count

    def counts_to_voltage(self, counts: int) -> float:
        if not 0 <= counts <= self.max_count:
            raise InvalidArgumentError(f'counts must be 0..{self.max_count}, got {counts}')
        return self.vref_low + counts * self.step_size

    def voltage_to_counts(self, voltage: float) -> float:
        """Ideal (unquantized) code for ``voltage``."""
        if not self.vref_low <= voltage <= self.vref_high:
            raise InvalidArgumentError(
                f'voltage {voltage} V is outside {self.vref_low}..{self.vref_high} V')
        return (voltage - self.vref_low) * self.max_count / self.span


def step_size(bits: int, vref_high: float, vref_low: float = 0.0) -> float:
    return ADC(bits, vref_high, vref_low).step_size


def counts_to_voltage(counts: int, bits: int, vref_high: float, vref_low: float = 0.0) -> float:
    return ADC(bits, vref_high, vref_low).counts_to_voltage(counts)


def voltage_to_counts(voltage: float, bits: int, vref_high: float, vref_low: float = 0.0) -> float:
    return ADC(bits, vref_high, vref_low).voltage_to_counts(voltage)
