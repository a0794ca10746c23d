"""Request body construction."""
from typing import Any, Mapping
from urllib.parse import urlencode

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


class RequestBuilder:
    """Builds request bodies for API calls."""

    @staticmethod
    def build_form_body(fields: Mapping[str, Any]) -> str:
        """
        Builds an x-www-form-urlencoded body.

        None values are dropped; everything else is stringified.
        """
        return urlencode(
            [(str(key), str(value)) for key, value in fields.items() if value is not None]
        )

    @staticmethod
    def build_params_body(encrypted_params: str) -> str:
        """Body of a POST call carrying the encrypted payload."""
        return RequestBuilder.build_form_body({'params': encrypted_params})
