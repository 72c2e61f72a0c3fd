"""
Tests for WAV decoding and encoding.
"""
import numpy as np
import pytest
import soundfile as sf

from clapless.audio.wav import WAVData, load_wav, output_subtype, write_wav
from clapless.errors import InputValidationError


class TestLoadWav:

    def test_stereo_is_interleaved(self, write_test_wav):
        frames = np.array([[0.5, -0.5], [0.25, -0.25], [0.0, 0.125]])
        wav = load_wav(write_test_wav("st.wav", frames, 8000))
        assert wav.channels == 2
        assert wav.sample_rate == 8000
        assert wav.bit_depth == 16
        assert wav.frames == 3
        assert np.allclose(wav.data, [0.5, -0.5, 0.25, -0.25, 0.0, 0.125], atol=1e-4)

    def test_mono(self, write_test_wav):
        wav = load_wav(write_test_wav("mono.wav", np.full(100, 0.25), 16_000))
        assert wav.channels == 1
        assert len(wav.data) == 100
        assert wav.duration == pytest.approx(100 / 16_000)

    def test_24_bit(self, tmp_path):
        path = tmp_path / "deep.wav"
        sf.write(str(path), np.zeros(10), 48_000, subtype="PCM_24")
        assert load_wav(path).bit_depth == 24

    @pytest.mark.parametrize("subtype, bits", [("FLOAT", 32), ("DOUBLE", 64)])
    def test_float_subtypes(self, write_test_wav, subtype, bits):
        wav = load_wav(write_test_wav("f.wav", np.array([0.5, -0.25]), 8000, subtype))
        assert wav.subtype == subtype
        assert wav.bit_depth == bits

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_wav(tmp_path / "nope.wav")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.wav"
        sf.write(str(path), np.zeros((0, 1)), 8000, subtype="PCM_16")
        with pytest.raises(InputValidationError, match="no audio data"):
            load_wav(path)


class TestWriteWav:

    def test_round_trip_keeps_layout(self, tmp_path):
        path = tmp_path / "out.wav"
        data = np.array([0.1, -0.1, 0.2, -0.2])
        write_wav(path, data, 22_050, 2, 24)
        wav = load_wav(path)
        assert (wav.channels, wav.sample_rate, wav.bit_depth) == (2, 22_050, 24)
        assert np.allclose(wav.data, data, atol=1e-6)

    def test_clamps_out_of_range(self, tmp_path):
        path = tmp_path / "loud.wav"
        write_wav(path, np.array([1.5, -2.0, 0.5]), 8000, 1, 16)
        wav = load_wav(path)
        assert wav.data[0] == pytest.approx(1.0, abs=1e-3)
        assert wav.data[1] == pytest.approx(-1.0, abs=1e-3)

    def test_rejects_partial_frame(self, tmp_path):
        with pytest.raises(InputValidationError, match="multiple"):
            write_wav(tmp_path / "bad.wav", np.zeros(5), 8000, 2, 16)

    def test_rejects_unknown_bit_depth(self, tmp_path):
        with pytest.raises(InputValidationError, match="bit depth"):
            write_wav(tmp_path / "bad.wav", np.zeros(4), 8000, 1, 12)

    @pytest.mark.parametrize("subtype", ["FLOAT", "DOUBLE", "PCM_16"])
    def test_round_trip_keeps_subtype(self, write_test_wav, tmp_path, subtype):
        data = np.array([0.123456789, -0.5, 0.75, -0.001])
        source = load_wav(write_test_wav("in.wav", data, 8000, subtype))

        path = tmp_path / "out.wav"
        write_wav(
            path, source.data, source.sample_rate, source.channels, source.bit_depth, source.subtype
        )

        assert sf.info(str(path)).subtype == subtype
        assert load_wav(path).bit_depth == source.bit_depth
        assert np.allclose(load_wav(path).data, source.data)

    def test_double_written_from_bit_depth_alone(self, tmp_path):
        path = tmp_path / "d.wav"
        write_wav(path, np.array([0.1, 0.2]), 8000, 1, 64)
        assert sf.info(str(path)).subtype == "DOUBLE"

    def test_rejects_subtype_wav_cannot_hold(self, tmp_path):
        with pytest.raises(InputValidationError, match="VORBIS"):
            write_wav(tmp_path / "bad.wav", np.zeros(4), 8000, 1, 16, "VORBIS")
        assert not (tmp_path / "bad.wav").exists()


class TestOutputSubtype:

    def test_known_subtype_wins_over_bit_depth(self):
        assert output_subtype(32, "FLOAT") == "FLOAT"

    @pytest.mark.parametrize(
        "bits, subtype",
        [(8, "PCM_U8"), (16, "PCM_16"), (24, "PCM_24"), (32, "PCM_32"), (64, "DOUBLE")],
    )
    def test_from_bit_depth(self, bits, subtype):
        assert output_subtype(bits) == subtype


class TestWAVData:

    def test_duration_string(self):
        wav = WAVData(path="x.wav", sample_rate=10, channels=2, bit_depth=16, data=np.zeros(65 * 10 * 2))
        assert wav.frames == 650
        assert wav.duration == 65.0
        assert wav.duration_string == "1:05"
