from .authenticator import Authenticator as Authenticator
from .authenticator import KeyManager as KeyManager
from .client import Client as Client
from .configuration import ClientConfig as ClientConfig
from .entities import APIError as APIError
from .entities import ConfigurationError as ConfigurationError
from .entities import DecodeError as DecodeError
from .entities import MalformedTokenError as MalformedTokenError
from .entities import NoSignerAvailableError as NoSignerAvailableError
from .entities import ParseError as ParseError
from .entities import SigningError as SigningError
from .entities import Token as Token
from .entities import TokenExpiredError as TokenExpiredError
from .entities import TransipError as TransipError
from .entities import TransportError as TransportError
from .entities import UnsupportedKeyTypeError as UnsupportedKeyTypeError
from .infrastructure.http import Method as Method
from .infrastructure.http import RestRequest as RestRequest
from .infrastructure.http import RestResponse as RestResponse
from .infrastructure.token_cache import FileTokenCache as FileTokenCache
from .infrastructure.token_cache import MemoryTokenCache as MemoryTokenCache
from .repositories.token_cache import TokenCache as TokenCache
