"""Journey progress and unlock service for vocabulary learning."""

__version__ = "0.1.0"
