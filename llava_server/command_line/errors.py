class OptionDefinitionError(ValueError):
    """An option set is ill-specified. This is a programming error, not a user error."""
