"""Celsius to Fahrenheit and Kelvin."""

from typing import NamedTuple


class Temperatures(NamedTuple):
    celsius: float
    fahrenheit: float
    kelvin: float


def convert(celsius: float) -> Temperatures:
    return Temperatures(
        celsius=celsius,
        fahrenheit=celsius * 1.8 + 32,
        kelvin=celsius + 273,
    )
