"""
Submission Proxy

Hands accepted registration records to the submit transport.

Current Status: Stubbed - the accepted record is logged and nothing is sent.
There is no account service to call; the transport contract is undefined.
"""

import logging
from typing import Any, Dict

from .models import SubmissionRecord

logger = logging.getLogger(__name__)


class SubmissionProxy:
    """
    Proxy for the registration submit transport.

    Password values never reach the log.
    """

    def __init__(self, submission_config: Dict[str, Any]):
        """
        Initialize submission proxy.

        Args:
            submission_config: Submission configuration dict:
                    - enabled: Whether a transport is configured
                    - endpoint: Where submissions would go (informational)
        """
        self.config = submission_config
        self.enabled = self.config.get('enabled', False)
        self.endpoint = self.config.get('endpoint')

        if self.enabled:
            logger.info(
                "Submission proxy initialized",
                extra={'endpoint': self.endpoint}
            )
        else:
            logger.info("Submission transport disabled (log only)")

    def submit(self, record: SubmissionRecord) -> Dict[str, Any]:
        """
        Submit an accepted record.

        Args:
            record: Record that passed validation

        Returns:
            Dict with:
                - submitted: Always False, nothing is transmitted
                - fields: Field names that were provided
        """
        provided = [
            name for name, value in record.to_dict().items()
            if value not in ("", None)
        ]
        logger.info(
            "Form submitted",
            extra={
                'fields': provided,
                'transport_enabled': self.enabled,
            }
        )
        if self.enabled:
            logger.info(
                "STUB: Submit transport called (nothing sent)",
                extra={'endpoint': self.endpoint}
            )
        return {"submitted": False, "fields": provided}
