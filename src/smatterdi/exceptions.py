class SmatterDIError(Exception):
    """Represent a base class for all smatterdi-specific failures.

    Catch this type when you want to handle any allocation or registry error
    path without matching each concrete exception class individually.
    """


class SmatterDINotInstantiableError(SmatterDIError):
    """Signal that a requested type cannot be allocated at all.

    Raised by ``ObjectAllocator.allocate`` for non-class keys, parameterized
    aliases, protocols, ``object`` itself, and for ``typing.final`` classes
    that would need a generated specialization.
    """


class SmatterDIConstructorMatchError(SmatterDIError):
    """Signal that constructor matching did not select exactly one candidate."""


class SmatterDINoMatchingConstructorError(SmatterDIConstructorMatchError):
    """Signal that no declared constructor accepts the supplied arguments.

    Typical fixes include passing arguments that match one of the class'
    ``__init__`` signatures, or declaring an additional overload.
    """


class SmatterDIAmbiguousConstructorError(SmatterDIConstructorMatchError):
    """Signal that several declared constructors accept the supplied arguments.

    Ambiguity is never resolved by tie-breaking. Narrow the overload
    annotations or pass arguments of more specific types.
    """


class SmatterDIConstructionFailedError(SmatterDIError):
    """Signal that the selected constructor raised.

    The original exception is available as ``__cause__``.
    """


class SmatterDIInvalidAccessorError(SmatterDIError):
    """Signal an invalid ``@inject`` accessor declaration.

    Accessors must be plain instance methods without parameters besides
    ``self``, must not be ``typing.final``, and must declare a return type that
    is neither ``None`` nor a primitive (``bool``, ``int``, ``float``,
    ``complex``).
    """


class SmatterDIUnregisteredTypeError(SmatterDIError):
    """Signal that an injection context has no slot for the requested type.

    Typical fix is calling ``set_implementation`` or ``set_provider`` for the
    type before any accessor asks for it.
    """


class SmatterDIComputeError(SmatterDIError):
    """Signal that a lazy value failed to compute.

    Raised for the failing computation and replayed on every later access;
    ``__cause__`` is always the original failure and the producer is never
    invoked again.
    """


class SmatterDIInstanceTypeError(SmatterDIError, TypeError):
    """Signal that a registry value does not match an accessor's return type."""


class SmatterDITypeDefinitionError(SmatterDIError):
    """Signal that a generated specialization could not be defined.

    Raised when the type loader fails or returns something that is not a
    subclass of the requested type.
    """


class SmatterDIInvalidRegistrationError(SmatterDIError):
    """Signal an invalid ``set_implementation``/``set_provider`` payload."""
