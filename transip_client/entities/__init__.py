from .exceptions import APIError as APIError
from .exceptions import ConfigurationError as ConfigurationError
from .exceptions import DecodeError as DecodeError
from .exceptions import MalformedTokenError as MalformedTokenError
from .exceptions import NoSignerAvailableError as NoSignerAvailableError
from .exceptions import ParseError as ParseError
from .exceptions import SigningError as SigningError
from .exceptions import TokenExpiredError as TokenExpiredError
from .exceptions import TransipError as TransipError
from .exceptions import TransportError as TransportError
from .exceptions import UnsupportedKeyTypeError as UnsupportedKeyTypeError
from .login_request import LoginRequest as LoginRequest
from .token import Token as Token
from .token import TokenClaims as TokenClaims
