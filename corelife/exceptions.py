class CoreLifeError(Exception):
    """Base for all corelife exceptions."""

    pass


# High-level families
class ConfigurationError(CoreLifeError, ValueError):
    """Invalid simulation configuration (core size, probabilities, ...)."""

    pass


class AddressingError(CoreLifeError):
    """Raw core access outside the valid address range."""

    pass


class InstructionError(CoreLifeError):
    """Instruction encoding failures."""

    pass


# Addressing subtypes
class OutOfRangeError(AddressingError, IndexError):
    """Raised when an absolute core address is outside [0, size)."""

    pass


# Instruction subtypes
class InstructionDecodeError(InstructionError, ValueError):
    """Raised when the textual form of an instruction has an unknown mnemonic."""

    pass
