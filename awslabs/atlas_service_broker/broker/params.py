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

"""Turn caller-supplied JSON parameters into Atlas definitions."""

import json
from ..common.utils import normalize_cluster_name
from ..constants import (
    DEFAULT_ROLE_DATABASE,
    DEFAULT_ROLE_NAME,
    ERROR_MALFORMED_PARAMS,
    USER_AUTH_DATABASE,
)
from ..exceptions import MalformedParameters
from ..models import (
    BindParameters,
    Cluster,
    ConnectionStringParams,
    ProviderSettings,
    ProvisionParameters,
    Role,
    User,
)
from pydantic import BaseModel, SecretStr
from pydantic import ValidationError as PydanticValidationError
from typing import Any, Dict, Optional, Type, TypeVar, Union


M = TypeVar('M', bound=BaseModel)

RawParameters = Optional[Union[bytes, str]]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"'{name}' is not valid JSON")


def load_parameters(raw_params: RawParameters) -> Dict[str, Any]:
    """Decode a raw parameter payload.

    An absent, empty or ``null`` payload yields an empty dictionary.

    Raises:
        MalformedParameters: If the payload is not a JSON object
    """
    if raw_params is None:
        return {}
    try:
        if isinstance(raw_params, (bytes, bytearray)):
            raw_params = raw_params.decode('utf-8')
        if not raw_params.strip():
            return {}
        params = json.loads(raw_params, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedParameters(ERROR_MALFORMED_PARAMS.format(e)) from e

    if params is None:
        return {}
    if not isinstance(params, dict):
        raise MalformedParameters(ERROR_MALFORMED_PARAMS.format('expected a JSON object'))
    return params


def parse_parameters(raw_params: RawParameters, model: Type[M]) -> M:
    """Decode a raw parameter payload into a parameter model.

    Unknown keys are ignored and missing keys keep the model defaults. Values
    are not coerced: ``"yes"`` is not a boolean and ``"2"`` is not an integer.

    Raises:
        MalformedParameters: If the payload is not a JSON object or a known key
            has a value of the wrong type
    """
    params = load_parameters(raw_params)
    try:
        # JSON input keeps nested objects valid for nested models under strict mode.
        return model.model_validate_json(json.dumps(params), strict=True)
    except PydanticValidationError as e:
        errors = '; '.join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise MalformedParameters(ERROR_MALFORMED_PARAMS.format(errors)) from e


def cluster_from_params(
    instance_id: str,
    provider_name: str,
    instance_size_name: Optional[str],
    raw_params: RawParameters,
    default_region: Optional[str] = None,
) -> Cluster:
    """Build the cluster definition for a provision or update.

    The plan decides the provider and, when given, the instance size; whatever
    the caller put in ``providerSettings`` for those is overwritten. The name
    is always derived from the instance ID.

    Args:
        instance_id: The instance ID assigned by the platform
        provider_name: Provider of the requested service
        instance_size_name: Instance size of the requested plan, None to keep the current one
        raw_params: The caller's parameters, ``{"cluster": {...}}``
        default_region: Region to use when the caller names none
    """
    params = parse_parameters(raw_params, ProvisionParameters)
    cluster = params.cluster or Cluster()

    settings = cluster.provider_settings or ProviderSettings()
    settings.provider_name = provider_name
    if instance_size_name:
        settings.instance_size_name = instance_size_name
    if not settings.region_name and default_region:
        settings.region_name = default_region

    cluster.provider_settings = settings
    cluster.name = normalize_cluster_name(instance_id)
    return cluster


def user_from_params(binding_id: str, password: str, raw_params: RawParameters) -> User:
    """Build the database user for a binding.

    The binding ID becomes the username so that unbind can find the user
    again without any local record. When the caller asks for no roles, the
    user gets read/write access to every database, the Atlas UI default.
    """
    params = parse_parameters(raw_params, BindParameters)
    user = params.user or User()

    user.username = binding_id
    user.password = SecretStr(password)
    user.database_name = USER_AUTH_DATABASE

    if not user.roles:
        user.roles = [Role(role_name=DEFAULT_ROLE_NAME, database_name=DEFAULT_ROLE_DATABASE)]

    return user


def connection_string_params_from_params(raw_params: RawParameters) -> ConnectionStringParams:
    """Read the connection string options of a bind request."""
    params = parse_parameters(raw_params, BindParameters)
    return params.connection_string or ConnectionStringParams()
