from vtrenamer.extraction.base import BaseExtractionGateway
from vtrenamer.extraction.factory import ExtractionGatewayFactory
from vtrenamer.extraction.gateway import ExtractionGateway
from vtrenamer.extraction.models import ExtractionResult, FailureReason

__all__ = [
    "BaseExtractionGateway",
    "ExtractionGateway",
    "ExtractionGatewayFactory",
    "ExtractionResult",
    "FailureReason",
]
