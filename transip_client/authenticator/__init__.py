from ._authenticator import AUTH_ENDPOINT as AUTH_ENDPOINT
from ._authenticator import SIGNATURE_HEADER as SIGNATURE_HEADER
from ._authenticator import Authenticator as Authenticator
from ._credentials import Credential as Credential
from ._credentials import KeyManagerCredential as KeyManagerCredential
from ._credentials import PrivateKeyCredential as PrivateKeyCredential
from ._credentials import StaticTokenCredential as StaticTokenCredential
from ._credentials import make_credential as make_credential
from ._credentials import read_private_key as read_private_key
from ._signing import KeyManager as KeyManager
from ._signing import load_rsa_private_key as load_rsa_private_key
from ._signing import sign_externally as sign_externally
from ._signing import sign_with_key as sign_with_key
