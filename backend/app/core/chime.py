"""
Synthesizes the timer-complete chime at the input rate, down-samples it
to the delivery rate and packs it as a base64 WAV data URI for the browser.
"""

import base64
import io

import numpy as np
import resampy
import soundfile as sf

from .config import get_settings


class ChimeGenerator:
    def __init__(self, settings=None) -> None:
        self.settings = settings or get_settings()
        self._data_uri = None

    def synthesize(self) -> np.ndarray:
        rate = self.settings.sampling_rate_in
        t = np.arange(int(rate * self.settings.chime_duration_sec)) / rate

        # Two partials with an exponential decay so it rings like a bell
        freq = self.settings.chime_frequency_hz
        tone = 0.6 * np.sin(2 * np.pi * freq * t) + 0.3 * np.sin(2 * np.pi * 2 * freq * t)
        envelope = np.exp(-5.0 * t)
        return (tone * envelope).astype(np.float32)

    def render(self) -> bytes:
        audio = resampy.resample(
            self.synthesize(),
            self.settings.sampling_rate_in,
            self.settings.sampling_rate_out,
        )

        # Clamp to [-1, 1] range and scale to int16 range
        audio_clamped = np.clip(audio, -1.0, 1.0)
        audio_int16 = (audio_clamped * 32767).astype(np.int16)

        buf = io.BytesIO()
        sf.write(buf, audio_int16, self.settings.sampling_rate_out, format="WAV", subtype="PCM_16")
        return buf.getvalue()

    def data_uri(self) -> str:
        if self._data_uri is None:
            encoded = base64.b64encode(self.render()).decode("utf-8")
            self._data_uri = f"data:audio/wav;base64,{encoded}"
        return self._data_uri
