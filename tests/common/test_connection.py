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

"""Tests for connection module."""

import httpx
import pytest
from awslabs.atlas_service_broker.atlas.client import AtlasClient
from awslabs.atlas_service_broker.common.connection import AtlasConnectionManager
from awslabs.atlas_service_broker.exceptions import ConfigurationError
from unittest.mock import patch


class TestAtlasConnectionManager:
    """Test cases for AtlasConnectionManager class."""

    def test_create_client_from_environment(self):
        """Test that create_client reads the project and key from the environment."""
        client = AtlasConnectionManager.create_client()

        assert isinstance(client, AtlasClient)
        assert client.group_id == 'mock-group-id'
        assert client.base_url == 'https://cloud.mongodb.com/api/atlas/v1.0'
        client.close()

    def test_arguments_override_environment(self):
        """Test that explicit arguments win over the environment."""
        client = AtlasConnectionManager.create_client(
            base_url='https://atlas.example.com/api/atlas/v1.0/', group_id='other-group'
        )

        assert client.group_id == 'other-group'
        assert client.base_url == 'https://atlas.example.com/api/atlas/v1.0'
        client.close()

    def test_retry_and_timeout_settings(self):
        """Test that retries and timeouts come from the environment."""
        with patch.dict(
            'os.environ',
            {'ATLAS_MAX_RETRIES': '5', 'ATLAS_CONNECT_TIMEOUT': '2', 'ATLAS_READ_TIMEOUT': '30'},
        ):
            with patch.object(httpx, 'HTTPTransport', wraps=httpx.HTTPTransport) as mock_transport:
                client = AtlasConnectionManager.create_client()

        mock_transport.assert_called_once_with(retries=5)
        assert client._http.timeout.connect == 2.0
        assert client._http.timeout.read == 30.0
        client.close()

    def test_default_retry_and_timeout_settings(self):
        """Test the retry and timeout defaults."""
        with patch.object(httpx, 'HTTPTransport', wraps=httpx.HTTPTransport) as mock_transport:
            client = AtlasConnectionManager.create_client()

        mock_transport.assert_called_once_with(retries=3)
        assert client._http.timeout.connect == 5.0
        assert client._http.timeout.read == 10.0
        client.close()

    def test_missing_configuration(self):
        """Test that missing settings are all reported at once."""
        with patch.dict('os.environ', {}, clear=True):
            with pytest.raises(ConfigurationError) as excinfo:
                AtlasConnectionManager.create_client()

        assert 'ATLAS_GROUP_ID' in excinfo.value.message
        assert 'ATLAS_PUBLIC_KEY' in excinfo.value.message
        assert 'ATLAS_PRIVATE_KEY' in excinfo.value.message

    def test_missing_private_key(self):
        """Test that a missing private key is reported without the public key."""
        with patch.dict('os.environ', {'ATLAS_PRIVATE_KEY': ''}):
            with pytest.raises(ConfigurationError) as excinfo:
                AtlasConnectionManager.create_client()

        assert 'ATLAS_PRIVATE_KEY' in excinfo.value.message
        assert 'ATLAS_PUBLIC_KEY' not in excinfo.value.message
