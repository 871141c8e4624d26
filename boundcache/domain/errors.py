
class CacheError(Exception):
    code = "cache_error"
    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        if code:
            self.code = code
        self.message = message

class CacheOverflow(CacheError):
    code = "cache_overflow"

class InvalidConfiguration(CacheError, ValueError):
    code = "invalid_configuration"
