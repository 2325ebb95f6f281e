# registrar/identity/exceptions.py


from registrar.exceptions import ConfigurationError


class IdentifierError(ConfigurationError): ...


class IdentifierNotSpecifiedError(IdentifierError):
    """Raised when neither metadata nor a resolver yields an identifier."""


class CompoundIdentifierError(IdentifierError):
    """Raised when compound identifiers are required but the method metadata has none."""


class InvalidHandlerSignatureError(IdentifierError):
    """Raised when a method does not fit the first-parameter resolver contract."""


class DuplicateIdentifierError(IdentifierError):
    """Raised when two registrations resolve to one identifier of a unique-key registry."""
