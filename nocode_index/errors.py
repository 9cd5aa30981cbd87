class NoCodeIndexError(Exception):
    """
    Base exception for all nocode-index failures.
    """

    pass


class PropertyParseError(NoCodeIndexError):
    """
    Raised when a parser recognises a raw value's shape but cannot decode it.
    """

    def __init__(self, message: str, *, editor_alias: str | None = None):
        super().__init__(message)
        self.editor_alias = editor_alias


class RegistryConfigurationError(NoCodeIndexError):
    """
    Raised when a parser registry is built from invalid entries.
    """

    pass


class DefinitionError(NoCodeIndexError):
    """
    Base exception for filter/sort definition failures.
    """

    pass


class DefinitionConfigurationError(DefinitionError):
    """
    Raised when a definition is structurally invalid (e.g. no source properties).
    """

    pass


class DefinitionNotFoundError(DefinitionError, KeyError):
    """
    Raised when a stored definition cannot be found.
    """

    pass
