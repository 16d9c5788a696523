"""
ADC Quantizer Module
====================

This module converts a continuous sensor voltage into an integer ADC code
and renders that code as a fixed-width binary string.

For an N-bit converter with reference voltage V_ref:

    code = floor((voltage / V_ref) * (2^N - 1))

Example (12 bits, V_ref = 3.3 V):
    2.25 V → floor(0.6818 * 4095) = 2792 → "101011101000"

Clamping:
    A code is never negative. When clamp_to_full_scale is set, codes above
    2^N - 1 saturate at full scale as a real converter would. Without it the
    code keeps growing, and its bit string is longer than N characters.
"""

import numpy as np


def parse_bits(bits: str) -> int:
    """Parse a binary string back to its integer code."""
    if not bits or any(character not in "01" for character in bits):
        raise ValueError(f"Not a binary string: {bits!r}")
    return int(bits, 2)


class AdcQuantizer:
    """
    A uniform N-bit analog-to-digital quantizer.

    Attributes:
        bit_width: Resolution in bits.
        voltage_reference: Full-scale voltage (V).
        maximum_code: Largest representable code, 2^N - 1.
        clamp_to_full_scale: Saturate codes above maximum_code.
    """

    def __init__(
        self,
        bit_width: int = 12,
        voltage_reference: float = 3.3,
        clamp_to_full_scale: bool = True
    ) -> None:
        """
        Initialize the quantizer.

        Args:
            bit_width: Number of bits (1 to 32).
            voltage_reference: Full-scale reference voltage. Must be positive.
            clamp_to_full_scale: If True, codes are limited to maximum_code.
        """
        if bit_width < 1 or bit_width > 32:
            raise ValueError(
                f"Bit width must be between 1 and 32 bits. "
                f"Received: {bit_width} bits"
            )

        if voltage_reference <= 0:
            raise ValueError(
                f"Voltage reference must be positive. "
                f"Received: {voltage_reference} V"
            )

        self.bit_width: int = bit_width
        self.voltage_reference: float = voltage_reference
        self.clamp_to_full_scale: bool = clamp_to_full_scale
        self.maximum_code: int = 2 ** bit_width - 1

    def quantize(self, voltage: float) -> int:
        """Convert a voltage to its ADC code."""
        code: int = int(np.floor((voltage / self.voltage_reference) * self.maximum_code))

        if code < 0:
            return 0
        if self.clamp_to_full_scale and code > self.maximum_code:
            return self.maximum_code
        return code

    def format_bits(self, code: int) -> str:
        """Render a code in base 2, zero-padded to bit_width characters."""
        if code < 0:
            raise ValueError(f"ADC codes are non-negative. Received: {code}")

        if code > self.maximum_code:
            # Unclamped overflow: numpy refuses a width that is too narrow
            return np.binary_repr(code)
        return np.binary_repr(code, width=self.bit_width)

    def code_to_voltage(self, code: int) -> float:
        """Return the voltage level a code represents (inverse mapping)."""
        return code * self.get_step_size_volts()

    def get_step_size_volts(self) -> float:
        """Voltage represented by one least significant bit."""
        return self.voltage_reference / self.maximum_code

    def get_number_of_levels(self) -> int:
        """Return the number of quantization levels, 2^N."""
        return self.maximum_code + 1
