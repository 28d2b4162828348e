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

"""Connection management for the Atlas API used by the Atlas Service Broker."""

import httpx
import os
from ..atlas.client import AtlasClient
from ..constants import (
    DEFAULT_ATLAS_BASE_URL,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_READ_TIMEOUT,
    ERROR_MISSING_CONFIG,
)
from ..exceptions import ConfigurationError
from typing import Optional


class AtlasConnectionManager:
    """Builds Atlas API clients from environment configuration."""

    _env_prefix: str = 'ATLAS'

    @classmethod
    def create_client(
        cls,
        base_url: Optional[str] = None,
        group_id: Optional[str] = None,
        public_key: Optional[str] = None,
        private_key: Optional[str] = None,
    ) -> AtlasClient:
        """Create an Atlas client with retry and timeout settings.

        Arguments override the matching ATLAS_* environment variables.

        Returns:
            AtlasClient: A client for the configured Atlas project

        Raises:
            ConfigurationError: If the project or API key is not configured
        """
        # get Atlas configuration from environment
        base_url = base_url or os.environ.get(
            f'{cls._env_prefix}_BASE_URL', DEFAULT_ATLAS_BASE_URL
        )
        group_id = group_id or os.environ.get(f'{cls._env_prefix}_GROUP_ID')
        public_key = public_key or os.environ.get(f'{cls._env_prefix}_PUBLIC_KEY')
        private_key = private_key or os.environ.get(f'{cls._env_prefix}_PRIVATE_KEY')

        missing = [
            f'{cls._env_prefix}_{name}'
            for name, value in (
                ('GROUP_ID', group_id),
                ('PUBLIC_KEY', public_key),
                ('PRIVATE_KEY', private_key),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(ERROR_MISSING_CONFIG.format(', '.join(missing)))

        # configuration retry settings
        max_retries = int(
            os.environ.get(f'{cls._env_prefix}_MAX_RETRIES', str(DEFAULT_MAX_RETRIES))
        )
        connect_timeout = float(
            os.environ.get(f'{cls._env_prefix}_CONNECT_TIMEOUT', str(DEFAULT_CONNECT_TIMEOUT))
        )
        read_timeout = float(
            os.environ.get(f'{cls._env_prefix}_READ_TIMEOUT', str(DEFAULT_READ_TIMEOUT))
        )

        # httpx only retries failed connection attempts, never a sent request
        transport = httpx.HTTPTransport(retries=max_retries)
        timeout = httpx.Timeout(read_timeout, connect=connect_timeout)

        return AtlasClient(
            base_url=base_url,
            group_id=group_id,
            public_key=public_key,
            private_key=private_key,
            timeout=timeout,
            transport=transport,
        )
