class EvmBindError(Exception):
    """
    Base class for all evmbind errors.

    Every error raised by the generator is fatal for the run it occurs in;
    no output file is written once one has been raised.
    """
    pass


class InvalidParameterError(EvmBindError):
    """
    Raised when a generation option is invalid or missing.

    For example, asking for constructor stripping without supplying an
    interpreter to execute the deployment code with.
    """
    pass


class InvalidAbiError(EvmBindError):
    """
    Raised when the ABI document cannot be used.

    This covers unparseable JSON, documents that are not a list of
    method descriptors, and descriptors with missing or ill-typed fields.
    """
    pass


class InvalidBytecodeError(EvmBindError):
    """
    Raised when the bytecode input is not a hex string.
    """
    pass


class NameCollisionError(EvmBindError):
    """
    Raised when two ABI methods produce the same exported binding name.

    Attributes:
        binding_name: The exported name both methods map to.
    """

    def __init__(self, message: str, binding_name: str | None = None):
        """
        Initialize a NameCollisionError.

        Args:
            message: Description of the error.
            binding_name: The colliding exported name.
        """
        super().__init__(message)
        self.binding_name = binding_name


class ConstructorArgumentsError(EvmBindError):
    """
    Raised when constructor stripping is requested for a contract whose
    constructor takes arguments.

    Stripping executes the deployment code with empty input, which cannot
    satisfy a constructor that decodes arguments.
    """
    pass


class ExecutionError(EvmBindError):
    """
    Raised when the bytecode interpreter fails to execute code.

    The message is the interpreter's own error text, unchanged.
    """
    pass
