"""Core data models: supported Whisper models and audio types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

SAMPLE_RATE = 16000
CHANNELS = 1
BITS_PER_SAMPLE = 16

_MODEL_URL_BASE = "https://huggingface.co/ggerganov/whisper.cpp/resolve/main"


class ModelVariant(Enum):
    """Supported Whisper models, valued by their user-facing name."""

    BASE_EN = "base.en"
    TINY_EN = "tiny.en"
    SMALL_EN = "small.en"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def file_name(self) -> str:
        return f"ggml-{self.value}.bin"

    @property
    def url(self) -> str:
        return f"{_MODEL_URL_BASE}/{self.file_name}"

    @classmethod
    def list(cls) -> List["ModelVariant"]:
        return list(cls)

    @classmethod
    def from_name(cls, name: str) -> Optional["ModelVariant"]:
        """Look a model up by display name; unknown names give ``None``."""
        try:
            return cls(name)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


class RecorderState(str, Enum):
    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"
    FINALIZED = "FINALIZED"


@dataclass
class AudioFrame:
    samples: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    sample_rate: int = SAMPLE_RATE
    channels: int = CHANNELS
    timestamp_ms: int = 0
