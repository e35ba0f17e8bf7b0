"""
Authentication Factory following Black Box Design principles.

This factory:
- Selects the authenticator variant from configuration, once
- Wires the panel client, hash primitive and sync loop together
- Returns only the Authenticator interface
"""

import logging
from typing import Optional

from ...config.provider import ConfigProvider
from ..panel import PanelClient
from .authenticator import ActiveAuthenticator, DisabledAuthenticator
from .interfaces import Authenticator, HashPrimitive, UsagePanel, sha224_hex

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authenticator.

    This is the composition root for the auth stack.
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        panel: Optional[UsagePanel] = None,
        hasher: Optional[HashPrimitive] = None,
        start: bool = True,
    ) -> Authenticator:
        """
        Build the authenticator.

        Args:
            config_provider: Configuration provider
            panel: Optional panel client; a PanelClient is built if omitted
            hasher: Optional hash primitive; SHA-224 hex if omitted
            start: Start the sync loop before returning

        Returns:
            DisabledAuthenticator when the panel is disabled, otherwise a
            seeded ActiveAuthenticator

        Raises:
            ConfigError: If the configuration is invalid
            InitializationError: If the initial fetch fails
        """
        config = config_provider.get_panel_config()

        if not config.enabled:
            logger.info("Panel authentication disabled; all credentials are accepted")
            return DisabledAuthenticator()

        logger.info(
            f"Building panel authenticator for node {config.node_id} "
            f"({config.node_type}) at {config.api_host}"
        )
        authenticator = ActiveAuthenticator(
            config,
            panel or PanelClient(config),
            hasher=hasher or sha224_hex,
        )
        if start:
            authenticator.start()
        return authenticator
