class BillScannerError(Exception):
    """Base exception for the bill scanner"""
    pass


class ConfigError(BillScannerError):
    """Raised when an environment setting cannot be parsed"""
    pass


class ConfigStoreError(BillScannerError):
    """Raised when the saved settings file cannot be written"""
    pass


class AnalyzerError(BillScannerError):
    """Raised inside the analyzer when the model gives nothing usable"""
    pass


class UnknownFieldError(BillScannerError, KeyError):
    """Raised when the review form is asked to edit a field it does not have"""
    pass


class ConfirmRejected(BillScannerError):
    """Raised when a confirm action is refused; the message is shown to the user"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
