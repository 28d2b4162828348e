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

"""Context management for the Atlas Service Broker."""

from ..constants import ERROR_NOT_INITIALIZED
from ..exceptions import ConfigurationError
from typing import TYPE_CHECKING, Optional


if TYPE_CHECKING:
    from ..broker.broker import Broker


class BrokerContext:
    """Holds the broker shared by all MCP tools and resources of the process."""

    _broker: Optional['Broker'] = None

    @classmethod
    def initialize(cls, broker: Optional['Broker'] = None):
        """Initialize the context.

        Args:
            broker (Optional[Broker]): The broker to serve requests with. Defaults to None.
        """
        cls._broker = broker

    @classmethod
    def broker(cls) -> 'Broker':
        """Get the broker serving MCP requests.

        Returns:
            The broker created at startup

        Raises:
            ConfigurationError: If the context has not been initialized
        """
        if cls._broker is None:
            raise ConfigurationError(ERROR_NOT_INITIALIZED)
        return cls._broker
