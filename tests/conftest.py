"""Shared fixtures: a fixed clock, a mocked gateway, and in-memory speech capabilities."""
import datetime
from typing import List
from unittest.mock import Mock

import pytest

from zora.client.speech import SpeechRecognizer, SpeechSynthesizer, Utterance, Voice
from zora.services.gateway_client import GatewayClient
from zora.services.relay_service import RelayService
from zora.utils.time_info import get_time_information


FIXED_NOW = datetime.datetime(2026, 10, 19, 17, 7)


class RecordingSynthesizer(SpeechSynthesizer):
    """Synthesizer that records utterances instead of playing them."""

    def __init__(self, language="en-US", voices=None):
        super().__init__(language)
        self.available_voices: List[Voice] = voices or []
        self.played: List[Utterance] = []
        self.cancel_count = 0

    @property
    def is_supported(self) -> bool:
        return True

    def voices(self) -> List[Voice]:
        return self.available_voices

    def _play(self, utterance: Utterance) -> None:
        self.played.append(utterance)

    def _cancel(self) -> None:
        self.cancel_count += 1


class ManualRecognizer(SpeechRecognizer):
    """Recognizer whose transcripts are delivered by the test."""

    def __init__(self, language="en-US"):
        super().__init__(language)
        self.started = 0
        self.stopped = 0

    @property
    def is_supported(self) -> bool:
        return True

    def _start(self) -> None:
        self.started += 1

    def _stop(self) -> None:
        self.stopped += 1


@pytest.fixture
def fixed_clock():
    return lambda: get_time_information(FIXED_NOW)


@pytest.fixture
def gateway():
    """GatewayClient mock; set complete.return_value / side_effect per test."""
    return Mock(spec=GatewayClient)


@pytest.fixture
def relay_service(gateway, fixed_clock):
    return RelayService(gateway=gateway, api_key_provider=lambda: "test-key", clock=fixed_clock)


@pytest.fixture
def synthesizer():
    return RecordingSynthesizer()


@pytest.fixture
def recognizer():
    return ManualRecognizer()
