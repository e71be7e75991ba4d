class InvalidConfigurationException(Exception):
    """ Exception raised when a cube state cannot be reached by turning the faces """
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

class InvalidTurnException(Exception):
    """ Exception raised when the turn cannot be made """
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
