# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Rendering of binding connection strings."""

import math
from ..constants import CONNECTION_STRING_FORMAT_STANDARD, ERROR_INVALID_ADDRESS
from ..exceptions import InvalidBackendAddress
from ..models import Cluster, ConnectionStringParams
from typing import Any, Dict, Optional
from urllib.parse import SplitResult, parse_qs, quote, urlencode, urlsplit, urlunsplit


# Reserved characters allowed unescaped in the user info (RFC 3986 3.2.1); ':'
# separates username and password so it's escaped like '@', '/' and '?'.
USERINFO_SAFE = "$&+,;="
PATH_SAFE = "/$&+,:;=@"


def build_connection_string(
    params: ConnectionStringParams,
    cluster: Cluster,
    binding_id: str,
    password: str,
) -> str:
    """Render the connection string handed out with a binding.

    The steps run in a fixed order since each one works on the URL the
    previous one produced:

    1. Pick the verbose address (``mongoURIWithOptions``) for the ``standard``
       format, the abbreviated SRV address otherwise.
    2. Parse it.
    3. Embed the binding ID and password, unless ``skipCredentials`` is set.
    4. Replace the path with ``database``, if given.
    5. Merge ``options`` into the query string and make sure a path exists,
       if any options are given.

    Args:
        params: The caller's rendering options
        cluster: The cluster as reported by Atlas
        binding_id: Username of the binding
        password: Password of the binding

    Raises:
        InvalidBackendAddress: If the selected cluster address can't be parsed
    """
    if params.format == CONNECTION_STRING_FORMAT_STANDARD:
        address = cluster.mongo_uri_with_options
    else:
        address = cluster.srv_address

    url = _parse_address(address)
    netloc, path, query = url.netloc, url.path, url.query

    if not params.skip_credentials:
        host = netloc.rpartition('@')[2]
        username = quote(binding_id, safe=USERINFO_SAFE)
        netloc = f'{username}:{quote(password, safe=USERINFO_SAFE)}@{host}'

    if params.database:
        path = quote(params.database, safe=PATH_SAFE)
        if not path.startswith('/'):
            path = '/' + path

    if params.options:
        query = _merge_options(query, params.options)
        # Some drivers refuse a query string that doesn't follow a path.
        if not path:
            path = '/'

    return urlunsplit((url.scheme, netloc, path, query, url.fragment))


def _parse_address(address: Optional[str]) -> SplitResult:
    if not address:
        raise InvalidBackendAddress(ERROR_INVALID_ADDRESS.format('address is empty'))
    try:
        url = urlsplit(address)
    except ValueError as e:
        raise InvalidBackendAddress(ERROR_INVALID_ADDRESS.format(e)) from e
    if not url.scheme or not url.netloc:
        raise InvalidBackendAddress(ERROR_INVALID_ADDRESS.format(address))
    return url


def _merge_options(query: str, options: Dict[str, Any]) -> str:
    """Set the options on top of the existing query, encoded with sorted keys."""
    values = parse_qs(query, keep_blank_values=True)
    for key, value in options.items():
        rendered = render_option(value)
        if rendered is not None:
            values[key] = [rendered]
    return urlencode(sorted(values.items()), doseq=True)


def render_option(value: Any) -> Optional[str]:
    """Render a connection string option value.

    Strings are kept, booleans become ``true``/``false`` and numbers are
    truncated to integers. Values of any other type are dropped (None).
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(int(value))
    return None
