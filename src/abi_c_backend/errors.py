from __future__ import annotations


class HeaderGenerationError(Exception):
    pass


class UnsupportedConstantTypeError(HeaderGenerationError):
    def __init__(self, constant_name: str, type_label: str) -> None:
        super().__init__(
            f"constant '{constant_name}' has type {type_label}; only non-void primitive constants can be emitted"
        )
        self.constant_name = constant_name
        self.type_label = type_label


class WriteFailureError(HeaderGenerationError):
    pass


class DependencyCycleError(HeaderGenerationError):
    def __init__(self, remaining: list[str]) -> None:
        super().__init__(f"Unable to order type declarations, unresolved: {', '.join(remaining)}")
        self.remaining = remaining


class InputError(HeaderGenerationError):
    pass


class ConfigError(InputError):
    pass


class IdlError(InputError):
    pass
