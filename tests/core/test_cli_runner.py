"""
Tests for CLI wiring.
"""
from unittest.mock import MagicMock

from src.core.cli_runner import build_regeneration_service
from src.repositories import ArtifactRepository, BusinessRepository, RegenerationQueueRepository


def test_build_regeneration_service_uses_mongodb_backends():
    service = build_regeneration_service(MagicMock())

    assert isinstance(service.queue, RegenerationQueueRepository)
    assert isinstance(service.businesses, BusinessRepository)
    assert isinstance(service.artifacts, ArtifactRepository)
