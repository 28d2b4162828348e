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

"""Constants for the Atlas Service Broker."""

# Error Messages
ERROR_MALFORMED_PARAMS = 'Malformed parameters: {}'
ERROR_UNKNOWN_SERVICE = 'Unknown service ID: {}'
ERROR_UNKNOWN_PLAN = 'Unknown plan ID: {}'
ERROR_UNKNOWN_OPERATION = 'Unknown operation: {}'
ERROR_ASYNC_REQUIRED = (
    'This service plan requires client support for asynchronous service operations.'
)
ERROR_SECRET_GENERATION = 'Failed to generate binding password'
ERROR_INVALID_ADDRESS = "Couldn't parse Atlas address URL: {}"
ERROR_INSTANCE_DOES_NOT_EXIST = 'instance does not exist'
ERROR_INSTANCE_ALREADY_EXISTS = 'instance already exists'
ERROR_BINDING_DOES_NOT_EXIST = 'binding does not exist'
ERROR_BINDING_ALREADY_EXISTS = 'binding already exists'
ERROR_BINDING_NOT_RETRIEVABLE = 'Unknown binding ID {}'
ERROR_MISSING_CONFIG = 'Missing required configuration: {}'
ERROR_NOT_INITIALIZED = 'The broker has not been initialized'
ERROR_CLIENT = 'Atlas error: {}'
ERROR_UNEXPECTED = 'Unexpected error: {}'

# Success Messages
SUCCESS_PROVISIONING = 'Provisioning of instance {} has started'
SUCCESS_UPDATING = 'Update of instance {} has started'
SUCCESS_DEPROVISIONING = 'Deprovisioning of instance {} has started'
SUCCESS_BOUND = 'Successfully created binding {}'
SUCCESS_UNBOUND = 'Successfully deleted binding {}'

# Operation data handed to the platform and echoed back on every poll
OPERATION_PROVISION = 'provision'
OPERATION_UPDATE = 'update'
OPERATION_DEPROVISION = 'deprovision'
OPERATIONS = (OPERATION_PROVISION, OPERATION_UPDATE, OPERATION_DEPROVISION)

# Atlas cluster states
CLUSTER_STATE_IDLE = 'IDLE'
CLUSTER_STATE_CREATING = 'CREATING'
CLUSTER_STATE_UPDATING = 'UPDATING'
CLUSTER_STATE_REPAIRING = 'REPAIRING'
CLUSTER_STATE_DELETED = 'DELETED'

# Atlas error codes
ATLAS_ERROR_CLUSTER_NOT_FOUND = 'CLUSTER_NOT_FOUND'
ATLAS_ERROR_DUPLICATE_CLUSTER_NAME = 'DUPLICATE_CLUSTER_NAME'
ATLAS_ERROR_USER_NOT_FOUND = 'USERNAME_NOT_FOUND'
ATLAS_ERROR_USER_ALREADY_EXISTS = 'USER_ALREADY_EXISTS'

# Atlas API
DEFAULT_ATLAS_BASE_URL = 'https://cloud.mongodb.com/api/atlas/v1.0'
DEFAULT_MAX_RETRIES = 3
DEFAULT_CONNECT_TIMEOUT = 5
DEFAULT_READ_TIMEOUT = 10

# Atlas accepts shorter cluster names in some environments than others
CLUSTER_NAME_MAX_LENGTH = 23

# Bindings
PASSWORD_ENTROPY_BYTES = 32
USER_AUTH_DATABASE = 'admin'
DEFAULT_ROLE_NAME = 'readWriteAnyDatabase'
DEFAULT_ROLE_DATABASE = 'admin'
CONNECTION_STRING_FORMAT_STANDARD = 'standard'

# Catalog
SERVICE_ID_PREFIX = 'aosb-cluster-service-'
SERVICE_NAME_PREFIX = 'mongodb-atlas-'
PLAN_ID_PREFIX = 'aosb-cluster-plan-'

PROVIDER_AWS = 'AWS'
PROVIDER_GCP = 'GCP'
PROVIDER_AZURE = 'AZURE'

PROVIDER_INSTANCE_SIZES = {
    PROVIDER_AWS: ['M10', 'M20', 'M30', 'M40', 'M50', 'M60', 'M80', 'M140', 'M200', 'M300'],
    PROVIDER_GCP: ['M10', 'M20', 'M30', 'M40', 'M50', 'M60', 'M80', 'M140', 'M200', 'M300'],
    PROVIDER_AZURE: ['M10', 'M20', 'M30', 'M40', 'M50', 'M60', 'M80', 'M200'],
}

PROVIDER_DEFAULT_REGIONS = {
    PROVIDER_AWS: 'US_EAST_1',
    PROVIDER_GCP: 'CENTRAL_US',
    PROVIDER_AZURE: 'US_EAST_2',
}

PROVIDER_DISPLAY_NAMES = {
    PROVIDER_AWS: 'Amazon Web Services',
    PROVIDER_GCP: 'Google Cloud Platform',
    PROVIDER_AZURE: 'Microsoft Azure',
}

# Resource URIs
RESOURCE_CATALOG = 'broker://catalog'
