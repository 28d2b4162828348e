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

"""Custom exceptions for the Atlas Service Broker."""

from .constants import (
    ERROR_ASYNC_REQUIRED,
    ERROR_BINDING_ALREADY_EXISTS,
    ERROR_BINDING_DOES_NOT_EXIST,
    ERROR_BINDING_NOT_RETRIEVABLE,
    ERROR_INSTANCE_ALREADY_EXISTS,
    ERROR_INSTANCE_DOES_NOT_EXIST,
)
from http import HTTPStatus
from typing import Optional


class BrokerException(Exception):
    """Base exception for the Atlas Service Broker.

    Attributes:
        error_code: Error code reported to the platform
        status_code: HTTP status the broker protocol associates with the error
    """

    error_code = 'InternalError'
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        """Initialize the BrokerException.

        Args:
            message: Human readable description of the failure
        """
        self.message = message
        super().__init__(message)


class MalformedParameters(BrokerException):
    """Exception raised when caller-supplied parameters are not valid JSON."""

    error_code = 'MalformedParameters'
    status_code = HTTPStatus.BAD_REQUEST


class ValidationError(BrokerException):
    """Exception raised for unknown service, plan or operation identifiers."""

    error_code = 'ValidationError'
    status_code = HTTPStatus.BAD_REQUEST


class AsyncRequired(BrokerException):
    """Exception raised when the caller does not accept asynchronous completion."""

    error_code = 'AsyncRequired'
    status_code = HTTPStatus.UNPROCESSABLE_ENTITY

    def __init__(self):
        """Initialize the AsyncRequired exception."""
        super().__init__(ERROR_ASYNC_REQUIRED)


class ConfigurationError(BrokerException):
    """Exception raised when the broker is started without required settings."""

    error_code = 'ConfigurationError'


class SecretGenerationFailed(BrokerException):
    """Exception raised when no secure random source is available."""

    error_code = 'SecretGenerationFailed'


class InvalidBackendAddress(BrokerException):
    """Exception raised when Atlas returns a cluster address that can't be parsed."""

    error_code = 'InvalidBackendAddress'


class NotFound(BrokerException):
    """Exception raised when the requested entity can't be found."""

    error_code = 'NotFound'
    status_code = HTTPStatus.NOT_FOUND


class InstanceDoesNotExist(NotFound):
    """Exception raised when the service instance is gone."""

    error_code = 'InstanceDoesNotExist'
    status_code = HTTPStatus.GONE

    def __init__(self):
        """Initialize the InstanceDoesNotExist exception."""
        super().__init__(ERROR_INSTANCE_DOES_NOT_EXIST)


class BindingDoesNotExist(NotFound):
    """Exception raised when the service binding is gone."""

    error_code = 'BindingDoesNotExist'
    status_code = HTTPStatus.GONE

    def __init__(self):
        """Initialize the BindingDoesNotExist exception."""
        super().__init__(ERROR_BINDING_DOES_NOT_EXIST)


class NotRetrievable(NotFound):
    """Exception raised when a binding's credentials are requested after creation."""

    error_code = 'NotRetrievable'

    def __init__(self, binding_id: str):
        """Initialize the NotRetrievable exception.

        Args:
            binding_id: The binding that was requested
        """
        self.binding_id = binding_id
        super().__init__(ERROR_BINDING_NOT_RETRIEVABLE.format(binding_id))


class InstanceAlreadyExists(BrokerException):
    """Exception raised when a cluster with the same name already exists."""

    error_code = 'InstanceAlreadyExists'
    status_code = HTTPStatus.CONFLICT

    def __init__(self):
        """Initialize the InstanceAlreadyExists exception."""
        super().__init__(ERROR_INSTANCE_ALREADY_EXISTS)


class BindingAlreadyExists(BrokerException):
    """Exception raised when a database user with the binding ID already exists."""

    error_code = 'BindingAlreadyExists'
    status_code = HTTPStatus.CONFLICT

    def __init__(self):
        """Initialize the BindingAlreadyExists exception."""
        super().__init__(ERROR_BINDING_ALREADY_EXISTS)


class BackendError(BrokerException):
    """Exception raised for any failure reported by or while talking to Atlas."""

    error_code = 'BackendError'
    status_code = HTTPStatus.BAD_GATEWAY

    def __init__(
        self,
        message: str,
        atlas_error_code: Optional[str] = None,
        http_status: Optional[int] = None,
    ):
        """Initialize the BackendError.

        Args:
            message: Description of the failure, usually the Atlas error detail
            atlas_error_code: The Atlas errorCode, if Atlas returned one
            http_status: The HTTP status of the Atlas response, if there was one
        """
        self.atlas_error_code = atlas_error_code
        self.http_status = http_status
        super().__init__(message)


class ClusterNotFound(BackendError):
    """Atlas reported that the cluster does not exist."""


class ClusterAlreadyExists(BackendError):
    """Atlas reported that the cluster name is already taken."""


class UserNotFound(BackendError):
    """Atlas reported that the database user does not exist."""


class UserAlreadyExists(BackendError):
    """Atlas reported that the database user already exists."""
