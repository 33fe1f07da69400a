class ValidationError(Exception):
    """
    Raised when a message is posted without a username or text.
    """

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Missing required fields: {', '.join(fields)}")
