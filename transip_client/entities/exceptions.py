class TransipError(Exception):
    """Base class of every error raised by the client."""


class ConfigurationError(TransipError):
    pass


class DecodeError(TransipError):
    """The private key input does not contain a PEM block."""


class ParseError(TransipError):
    """The PEM block is not a PKCS8 private key."""


class UnsupportedKeyTypeError(TransipError):
    """The private key parsed fine but is not an RSA key."""

    def __init__(self, key_type: str):
        self.key_type = key_type
        super().__init__(f"private key was no RSA key: {key_type}")


class SigningError(TransipError):
    pass


class NoSignerAvailableError(TransipError):
    def __init__(self, message: str = "no key manager is available"):
        super().__init__(message)


class MalformedTokenError(TransipError):
    pass


class TokenExpiredError(TransipError):
    def __init__(self, message: str = "token expired and no private key or key manager is configured to request a new one"):
        super().__init__(message)


class TransportError(TransipError):
    pass


class APIError(TransipError):
    """
    Raised for every non-2xx response, carrying the message of the
    `{"error": "..."}` envelope and the HTTP status code.
    """

    def __init__(self, message: str, status_code: int):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __eq__(self, other):
        if not isinstance(other, APIError):
            return NotImplemented

        return (self.message, self.status_code) == (other.message, other.status_code)

    def __hash__(self):
        return hash((self.message, self.status_code))

    def __repr__(self):
        return f"APIError(message={self.message!r}, status_code={self.status_code})"
