from ._rest import Method as Method
from ._rest import RestRequest as RestRequest
from ._rest import RestResponse as RestResponse
from ._rest import api_error_from_body as api_error_from_body
from ._rest import encode_json as encode_json
from ._rest import HTTP_BODY_LIMIT as HTTP_BODY_LIMIT
from ._rest import read_body as read_body
