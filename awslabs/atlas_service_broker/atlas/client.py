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

"""Client for the MongoDB Atlas cluster and database user APIs."""

import httpx
from ..constants import (
    ATLAS_ERROR_CLUSTER_NOT_FOUND,
    ATLAS_ERROR_DUPLICATE_CLUSTER_NAME,
    ATLAS_ERROR_USER_ALREADY_EXISTS,
    ATLAS_ERROR_USER_NOT_FOUND,
    ERROR_CLIENT,
    USER_AUTH_DATABASE,
)
from ..exceptions import (
    BackendError,
    ClusterAlreadyExists,
    ClusterNotFound,
    UserAlreadyExists,
    UserNotFound,
)
from ..models import Cluster, User
from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote, urlsplit


M = TypeVar('M', bound=BaseModel)

ATLAS_ERROR_TYPES: Dict[str, Type[BackendError]] = {
    ATLAS_ERROR_CLUSTER_NOT_FOUND: ClusterNotFound,
    ATLAS_ERROR_DUPLICATE_CLUSTER_NAME: ClusterAlreadyExists,
    ATLAS_ERROR_USER_NOT_FOUND: UserNotFound,
    ATLAS_ERROR_USER_ALREADY_EXISTS: UserAlreadyExists,
}


class AtlasClient:
    """Synchronous client for one Atlas project (group).

    All paths are relative to ``{base_url}/groups/{group_id}``. Requests are
    authenticated with the project's programmatic API key using HTTP digest
    authentication. Every failure is raised as a ``BackendError``, narrowed to
    one of its subclasses when Atlas reports a known error code.
    """

    def __init__(
        self,
        base_url: str,
        group_id: str,
        public_key: str,
        private_key: str,
        timeout: Optional[httpx.Timeout] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Atlas API root, e.g. https://cloud.mongodb.com/api/atlas/v1.0
            group_id: The Atlas project (group) clusters and users live in
            public_key: Public part of the programmatic API key
            private_key: Private part of the programmatic API key
            timeout: Request timeouts, httpx defaults when omitted
            transport: Transport to send requests with, httpx default when omitted
        """
        self.base_url = base_url.rstrip('/')
        self.group_id = group_id
        self._http = httpx.Client(
            base_url=f'{self.base_url}/groups/{quote(group_id, safe="")}',
            auth=httpx.DigestAuth(public_key, private_key),
            headers={'Accept': 'application/json'},
            timeout=timeout if timeout is not None else httpx.Timeout(10.0),
            transport=transport,
        )

    def get_cluster(self, name: str) -> Cluster:
        """Fetch a cluster by name."""
        return self._parse(Cluster, self._request('GET', f'/clusters/{_escape(name)}'))

    def create_cluster(self, cluster: Cluster) -> Cluster:
        """Start creating a cluster. Atlas returns it in state CREATING."""
        data = self._request('POST', '/clusters', json=cluster.to_request())
        return self._parse(Cluster, data)

    def update_cluster(self, name: str, cluster: Cluster) -> Cluster:
        """Start modifying a cluster. Atlas returns it in state UPDATING."""
        data = self._request('PATCH', f'/clusters/{_escape(name)}', json=cluster.to_request())
        return self._parse(Cluster, data)

    def delete_cluster(self, name: str) -> None:
        """Start terminating a cluster."""
        self._request('DELETE', f'/clusters/{_escape(name)}')

    def create_user(self, user: User) -> User:
        """Create a database user."""
        data = self._request('POST', '/databaseUsers', json=user.to_request())
        return self._parse(User, data)

    def get_user(self, username: str) -> User:
        """Fetch a database user by username.

        The broker never reads a user back. This is here for operators
        inspecting a binding by hand.
        """
        data = self._request(
            'GET', f'/databaseUsers/{USER_AUTH_DATABASE}/{_escape(username)}'
        )
        return self._parse(User, data)

    def delete_user(self, username: str) -> None:
        """Delete a database user by username."""
        self._request('DELETE', f'/databaseUsers/{USER_AUTH_DATABASE}/{_escape(username)}')

    def dashboard_url(self, cluster_name: str) -> str:
        """Build the Atlas UI link for a cluster."""
        parts = urlsplit(self.base_url)
        return f'{parts.scheme}://{parts.netloc}/v2/{self.group_id}#clusters/detail/{cluster_name}'

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f'Atlas request {method} {path} failed: {e}')
            raise BackendError(ERROR_CLIENT.format(str(e))) from e

        if response.is_error:
            raise _error_from_response(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                ERROR_CLIENT.format('response is not valid JSON'),
                http_status=response.status_code,
            ) from e

    @staticmethod
    def _parse(model: Type[M], data: Any) -> M:
        try:
            return model.model_validate(data or {})
        except PydanticValidationError as e:
            raise BackendError(ERROR_CLIENT.format(f'unexpected {model.__name__} payload')) from e


def _escape(segment: str) -> str:
    return quote(segment, safe='')


def _error_from_response(response: httpx.Response) -> BackendError:
    """Turn an Atlas error response into the matching BackendError."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    error_code = body.get('errorCode')
    detail = body.get('detail') or body.get('reason') or response.reason_phrase
    error_type = ATLAS_ERROR_TYPES.get(error_code, BackendError)
    return error_type(
        ERROR_CLIENT.format(detail),
        atlas_error_code=error_code,
        http_status=response.status_code,
    )
