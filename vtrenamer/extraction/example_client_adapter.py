"""Example extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in
ExtractionGatewayFactory.
"""

import json

from vtrenamer.extraction.client_base import BaseExtractionClient, DocumentAttachment


class ExampleClientAdapter(BaseExtractionClient):
    """Example adapter that answers every document with one fixed trip number.

    No network calls. Useful for local development and dry runs of a batch.
    """

    def __init__(self, trip_number: str | None = "EXAMPLE-0001") -> None:
        self._trip_number = trip_number

    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
        attachment: DocumentAttachment | None = None,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema, attachment
        return json.dumps({"trip_number": self._trip_number})
