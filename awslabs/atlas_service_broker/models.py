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

"""Data models for the Atlas Service Broker."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from typing import Any, Dict, List, Optional


class AtlasModel(BaseModel):
    """Base model for Atlas API payloads.

    Fields are read and written under their camelCase Atlas names, may also be
    populated by their Python names, and unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    def to_request(self) -> Dict[str, Any]:
        """Render the model as an Atlas request body."""
        return self.model_dump(by_alias=True, exclude_none=True)


class AutoScalingConfig(AtlasModel):
    """Cluster auto scaling settings."""

    disk_gb_enabled: Optional[bool] = Field(default=None, alias='diskGBEnabled')


class BIConnectorConfig(AtlasModel):
    """BI Connector settings."""

    enabled: Optional[bool] = None
    read_preference: Optional[str] = Field(default=None, alias='readPreference')


class ProviderSettings(AtlasModel):
    """Cloud provider settings for a cluster."""

    provider_name: Optional[str] = Field(default=None, alias='providerName')
    backing_provider_name: Optional[str] = Field(default=None, alias='backingProviderName')
    instance_size_name: Optional[str] = Field(default=None, alias='instanceSizeName')
    region_name: Optional[str] = Field(default=None, alias='regionName')
    disk_iops: Optional[int] = Field(default=None, alias='diskIOPS')
    encrypt_ebs_volume: Optional[bool] = Field(default=None, alias='encryptEBSVolume')
    volume_type: Optional[str] = Field(default=None, alias='volumeType')


class RegionsConfig(AtlasModel):
    """Node layout for one region of a replication spec."""

    electable_nodes: Optional[int] = Field(default=None, alias='electableNodes')
    read_only_nodes: Optional[int] = Field(default=None, alias='readOnlyNodes')
    analytics_nodes: Optional[int] = Field(default=None, alias='analyticsNodes')
    priority: Optional[int] = None


class ReplicationSpec(AtlasModel):
    """Replication layout of a cluster zone."""

    id: Optional[str] = None
    num_shards: Optional[int] = Field(default=None, alias='numShards')
    zone_name: Optional[str] = Field(default=None, alias='zoneName')
    regions_config: Optional[Dict[str, RegionsConfig]] = Field(
        default=None, alias='regionsConfig'
    )


class Cluster(AtlasModel):
    """An Atlas cluster, both as requested and as reported by Atlas."""

    name: Optional[str] = None
    cluster_type: Optional[str] = Field(default=None, alias='clusterType')
    mongodb_major_version: Optional[str] = Field(default=None, alias='mongoDBMajorVersion')
    num_shards: Optional[int] = Field(default=None, alias='numShards')
    disk_size_gb: Optional[float] = Field(default=None, alias='diskSizeGB')
    backup_enabled: Optional[bool] = Field(default=None, alias='backupEnabled')
    provider_backup_enabled: Optional[bool] = Field(default=None, alias='providerBackupEnabled')
    encryption_at_rest_provider: Optional[str] = Field(
        default=None, alias='encryptionAtRestProvider'
    )
    auto_scaling: Optional[AutoScalingConfig] = Field(default=None, alias='autoScaling')
    bi_connector: Optional[BIConnectorConfig] = Field(default=None, alias='biConnector')
    provider_settings: Optional[ProviderSettings] = Field(default=None, alias='providerSettings')
    replication_specs: Optional[List[ReplicationSpec]] = Field(
        default=None, alias='replicationSpecs'
    )

    # reported by Atlas only
    state_name: Optional[str] = Field(default=None, alias='stateName')
    srv_address: Optional[str] = Field(default=None, alias='srvAddress')
    mongo_uri: Optional[str] = Field(default=None, alias='mongoURI')
    mongo_uri_with_options: Optional[str] = Field(default=None, alias='mongoURIWithOptions')

    def to_request(self) -> Dict[str, Any]:
        """Render the cluster definition, leaving out fields Atlas manages."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude={'state_name', 'srv_address', 'mongo_uri', 'mongo_uri_with_options'},
        )


class Role(AtlasModel):
    """A database role granted to a user."""

    role_name: Optional[str] = Field(default=None, alias='roleName')
    database_name: Optional[str] = Field(default=None, alias='databaseName')
    collection_name: Optional[str] = Field(default=None, alias='collectionName')


class User(AtlasModel):
    """An Atlas database user."""

    username: Optional[str] = None
    password: Optional[SecretStr] = None
    database_name: Optional[str] = Field(default=None, alias='databaseName')
    ldap_auth_type: Optional[str] = Field(default=None, alias='ldapAuthType')
    roles: Optional[List[Role]] = None

    def to_request(self) -> Dict[str, Any]:
        """Render the user, revealing the password only in the request body."""
        payload = self.model_dump(by_alias=True, exclude_none=True, exclude={'password'})
        if self.password is not None:
            payload['password'] = self.password.get_secret_value()
        return payload


class ConnectionStringParams(BaseModel):
    """Caller options for rendering a binding's connection string."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    skip_credentials: Optional[bool] = Field(default=None, alias='skipCredentials')
    database: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    format: Optional[str] = None


class ProvisionParameters(BaseModel):
    """Parameters accepted by provision and update."""

    model_config = ConfigDict(extra='ignore')

    cluster: Optional[Cluster] = None


class BindParameters(BaseModel):
    """Parameters accepted by bind."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    user: Optional[User] = None
    connection_string: Optional[ConnectionStringParams] = Field(
        default=None, alias='connectionString'
    )


class PlanConfig(BaseModel):
    """Backend configuration a catalog plan maps to."""

    provider_name: str
    instance_size_name: str
    default_region: Optional[str] = None


class ServicePlan(BaseModel):
    """A plan in the service catalog."""

    id: str
    name: str
    description: str


class Service(BaseModel):
    """A service in the service catalog."""

    id: str
    name: str
    description: str
    bindable: bool = True
    plan_updateable: bool = True
    instances_retrievable: bool = False
    bindings_retrievable: bool = False
    tags: List[str] = Field(default_factory=list)
    plans: List[ServicePlan] = Field(default_factory=list)


class OperationState(str, Enum):
    """State of an asynchronous operation as reported to the platform."""

    IN_PROGRESS = 'in progress'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


class LastOperation(BaseModel):
    """Outcome of polling an asynchronous operation."""

    state: OperationState
    description: Optional[str] = None


class ProvisionedServiceSpec(BaseModel):
    """Response to a provision request."""

    is_async: bool = True
    operation: str
    dashboard_url: Optional[str] = None


class UpdateServiceSpec(BaseModel):
    """Response to an update request."""

    is_async: bool = True
    operation: str
    dashboard_url: Optional[str] = None


class DeprovisionServiceSpec(BaseModel):
    """Response to a deprovision request."""

    is_async: bool = True
    operation: str


class ConnectionDetails(BaseModel):
    """Credentials returned when a new binding is created."""

    username: str
    password: str
    uri: Optional[str] = None
    connection_string: str


class Binding(BaseModel):
    """Response to a bind request."""

    credentials: ConnectionDetails


class UnbindSpec(BaseModel):
    """Response to an unbind request."""

    is_async: bool = False
