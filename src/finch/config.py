"""Form configuration.

FormConfig is a frozen dataclass: immutable after creation, shared by
every form a registry binds.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Form configuration. Immutable after creation.

    Override what you need::

        registry = FormRegistry(config=FormConfig(max_array_length=64))
    """

    # Array fields: indexes at or above this bound are ignored
    max_array_length: int = 10_000

    def __post_init__(self) -> None:
        if self.max_array_length < 1:
            msg = f"max_array_length must be positive, got {self.max_array_length}"
            raise ValueError(msg)
