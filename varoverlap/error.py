class InvalidInputError(TypeError):
    """
    raised when a required collaborator is missing or does not have the expected capabilities
    """
    pass


class ReferenceLookupError(LookupError):
    """
    raised when the reference sequence for a variation site cannot be retrieved
    """
    pass
