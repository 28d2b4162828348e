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

"""Tests for parameter parsing and merging."""

import json
import pytest
from awslabs.atlas_service_broker.broker.params import (
    cluster_from_params,
    connection_string_params_from_params,
    load_parameters,
    user_from_params,
)
from awslabs.atlas_service_broker.exceptions import MalformedParameters


INSTANCE_ID = '6b2a3c1e-1f0e-4c1a-9d4e-2b7f5a9c0d11'


class TestLoadParameters:
    """Test cases for load_parameters."""

    @pytest.mark.parametrize('raw', [None, '', '   ', b'', 'null', b'null'])
    def test_absent_parameters(self, raw):
        """Test that absent, empty and null payloads yield no parameters."""
        assert load_parameters(raw) == {}

    def test_bytes_payload(self):
        """Test that a bytes payload is decoded."""
        assert load_parameters(b'{"a": 1}') == {'a': 1}

    @pytest.mark.parametrize(
        'raw',
        [
            '{',
            '{"a": }',
            b'\xff\xfe',
            '[1, 2]',
            '"text"',
            '42',
            '{"a": NaN}',
            '{"a": Infinity}',
            '{"a": -Infinity}',
        ],
    )
    def test_malformed_parameters(self, raw):
        """Test that invalid JSON and non-object payloads are rejected."""
        with pytest.raises(MalformedParameters):
            load_parameters(raw)


class TestClusterFromParams:
    """Test cases for cluster_from_params."""

    def test_defaults_without_parameters(self):
        """Test the cluster built when no parameters are given."""
        cluster = cluster_from_params(INSTANCE_ID, 'AWS', 'M10', None, default_region='US_EAST_1')

        assert cluster.name == INSTANCE_ID[:23]
        assert cluster.provider_settings.provider_name == 'AWS'
        assert cluster.provider_settings.instance_size_name == 'M10'
        assert cluster.provider_settings.region_name == 'US_EAST_1'

    def test_plan_overrides_provider_settings(self):
        """Test that the plan's provider and size win over the caller's values."""
        raw = json.dumps(
            {
                'cluster': {
                    'name': 'custom-name',
                    'backupEnabled': True,
                    'providerSettings': {
                        'providerName': 'GCP',
                        'instanceSizeName': 'M80',
                        'regionName': 'EU_WEST_1',
                    },
                }
            }
        )

        cluster = cluster_from_params(INSTANCE_ID, 'AWS', 'M20', raw, default_region='US_EAST_1')

        assert cluster.name == INSTANCE_ID[:23]
        assert cluster.backup_enabled is True
        assert cluster.provider_settings.provider_name == 'AWS'
        assert cluster.provider_settings.instance_size_name == 'M20'
        assert cluster.provider_settings.region_name == 'EU_WEST_1'

    def test_keeps_size_without_plan(self):
        """Test that no instance size is set when the plan doesn't change."""
        cluster = cluster_from_params(INSTANCE_ID, 'AWS', None, '{"cluster": {"diskSizeGB": 40}}')

        assert cluster.provider_settings.instance_size_name is None
        assert cluster.provider_settings.region_name is None
        assert cluster.disk_size_gb == 40
        assert 'instanceSizeName' not in cluster.to_request()['providerSettings']

    def test_unknown_keys_are_ignored(self):
        """Test that keys the broker doesn't know are dropped."""
        cluster = cluster_from_params(
            INSTANCE_ID, 'AWS', 'M10', '{"other": 1, "cluster": {"madeUp": true}}'
        )

        assert 'madeUp' not in cluster.to_request()

    def test_wrong_type_is_malformed(self):
        """Test that a known key with a value of the wrong type is rejected."""
        with pytest.raises(MalformedParameters) as excinfo:
            cluster_from_params(INSTANCE_ID, 'AWS', 'M10', '{"cluster": {"numShards": "many"}}')

        assert 'numShards' in excinfo.value.message

    @pytest.mark.parametrize(
        'raw',
        [
            '{"cluster": {"numShards": "2"}}',
            '{"cluster": {"backupEnabled": "false"}}',
            '{"cluster": {"diskSizeGB": "40"}}',
        ],
    )
    def test_numeric_and_boolean_strings_are_malformed(self, raw):
        """Test that string values are not coerced into numbers or booleans."""
        with pytest.raises(MalformedParameters):
            cluster_from_params(INSTANCE_ID, 'AWS', 'M10', raw)

    def test_malformed_json(self):
        """Test that invalid JSON is rejected."""
        with pytest.raises(MalformedParameters):
            cluster_from_params(INSTANCE_ID, 'AWS', 'M10', '{"cluster":')


class TestUserFromParams:
    """Test cases for user_from_params."""

    def test_default_user(self):
        """Test the user built when no parameters are given."""
        user = user_from_params('binding-1', 'generated', None)

        assert user.username == 'binding-1'
        assert user.password.get_secret_value() == 'generated'
        assert user.database_name == 'admin'
        assert len(user.roles) == 1
        assert user.roles[0].role_name == 'readWriteAnyDatabase'
        assert user.roles[0].database_name == 'admin'

    def test_custom_roles_are_kept(self):
        """Test that roles given by the caller replace the default role."""
        raw = '{"user": {"roles": [{"roleName": "read", "databaseName": "app"}]}}'

        user = user_from_params('binding-1', 'generated', raw)

        assert [(r.role_name, r.database_name) for r in user.roles] == [('read', 'app')]

    def test_empty_roles_get_default(self):
        """Test that an empty role list gets the default role."""
        user = user_from_params('binding-1', 'generated', '{"user": {"roles": []}}')

        assert user.roles[0].role_name == 'readWriteAnyDatabase'

    def test_caller_cannot_choose_identity(self):
        """Test that username, password and database always come from the broker."""
        raw = json.dumps(
            {
                'user': {
                    'username': 'admin',
                    'password': 'chosen',  # pragma: allowlist secret
                    'databaseName': 'app',
                }
            }
        )

        user = user_from_params('binding-1', 'generated', raw)

        assert user.username == 'binding-1'
        assert user.password.get_secret_value() == 'generated'
        assert user.database_name == 'admin'

    def test_password_not_in_repr(self):
        """Test that the password is masked outside of the request body."""
        user = user_from_params('binding-1', 'generated', None)

        assert 'generated' not in repr(user)
        assert user.to_request()['password'] == 'generated'


class TestConnectionStringParamsFromParams:
    """Test cases for connection_string_params_from_params."""

    def test_defaults(self):
        """Test the options used when none are given."""
        params = connection_string_params_from_params(None)

        assert params.skip_credentials is None
        assert params.database is None
        assert params.options is None
        assert params.format is None

    def test_options(self):
        """Test that the connection string options are read."""
        raw = json.dumps(
            {
                'connectionString': {
                    'skipCredentials': True,
                    'database': 'app',
                    'options': {'w': 'majority'},
                    'format': 'standard',
                }
            }
        )

        params = connection_string_params_from_params(raw)

        assert params.skip_credentials is True
        assert params.database == 'app'
        assert params.options == {'w': 'majority'}
        assert params.format == 'standard'

    @pytest.mark.parametrize('value', ['yes', 1, 'true'])
    def test_skip_credentials_must_be_boolean(self, value):
        """Test that skipCredentials is not coerced from strings or numbers."""
        raw = json.dumps({'connectionString': {'skipCredentials': value}})

        with pytest.raises(MalformedParameters) as excinfo:
            connection_string_params_from_params(raw)

        assert 'skipCredentials' in excinfo.value.message

    def test_non_finite_option_is_malformed(self):
        """Test that NaN in the options is rejected as invalid JSON."""
        with pytest.raises(MalformedParameters):
            connection_string_params_from_params('{"connectionString": {"options": {"a": NaN}}}')
